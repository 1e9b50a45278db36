# Collection names written by the XRPL ingestion pipeline.

USERS = "users"
TRANSACTIONS = "transactions"
TRADES = "trades"
OPEN_ORDERS = "open_orders"
FILLED_ORDERS = "filled_orders"
CANCELED_ORDERS = "canceled_orders"
DEPOSITS_WITHDRAWALS = "deposits_withdrawals"

# Notes:
# - Order lifecycle states live in separate collections (open/filled/canceled).
# - Identity is usually user_id, but older documents use userId/account/Account/address.
