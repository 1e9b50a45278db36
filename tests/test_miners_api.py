"""
Tests for the miner order and deposit/withdrawal endpoints.
"""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from xrpl_dashboard.core.dependencies import get_query_executor
from xrpl_dashboard.main import app

SOLO = "534F4C4F00000000000000000000000000000000"


class TestOrderHistory:
    """Tests for GET /api/miners/orders."""

    @pytest.mark.asyncio
    async def test_history_merges_filled_and_canceled(
        self,
        test_client: AsyncClient,
        executor_factory,
        filled_order,
        canceled_order
    ):
        """Test both states are merged newest first."""
        executor = executor_factory(find={
            "filled_orders": [filled_order],
            "canceled_orders": [canceled_order],
        })
        app.dependency_overrides[get_query_executor] = lambda: executor

        response = await test_client.get("/api/miners/orders", params={"userId": "miner_001"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [order["orderId"] for order in data["data"]] == ["E5F6A7B8", "A1B2C3D4"]
        assert [order["status"] for order in data["data"]] == ["Cancelled", "Filled"]
        assert data["data"][1]["executedPrice"] == "0.5"
        assert data["pagination"]["totalCount"] == 2

    @pytest.mark.asyncio
    async def test_history_filters(
        self,
        test_client: AsyncClient,
        mock_executor
    ):
        """Test pair and side filters reach every queried collection."""
        response = await test_client.get(
            "/api/miners/orders",
            params={"tradingPair": "SOLO/XRP", "side": "SELL", "status": "Filled"}
        )

        assert response.status_code == 200
        queried = {call.args[0] for call in mock_executor.find.await_args_list}
        assert queried == {"filled_orders"}
        query = mock_executor.find.await_args.args[1]
        assert query == {"trading_pair.id": "SOLO/XRP", "market_side": "sell"}

    @pytest.mark.asyncio
    async def test_history_invalid_status_returns_400(self, test_client: AsyncClient):
        response = await test_client.get("/api/miners/orders", params={"status": "Open"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"].startswith("Failed to fetch order history: Invalid status: Open")


class TestOpenOrders:
    """Tests for GET /api/miners/open-orders."""

    @pytest.mark.asyncio
    async def test_open_orders_default_page_size(
        self,
        test_client: AsyncClient,
        executor_factory
    ):
        """Test open orders default to 15 per page and are returned as stored."""
        orders = [
            {"hash": f"O{i}", "created_date": datetime(2025, 3, 1, tzinfo=timezone.utc)}
            for i in range(20)
        ]
        executor = executor_factory(find={"open_orders": orders})
        app.dependency_overrides[get_query_executor] = lambda: executor

        response = await test_client.get("/api/miners/open-orders", params={"tradingPair": "ALL"})

        assert response.status_code == 200
        data = response.json()
        assert len(data["data"]) == 15
        assert data["data"][0] == {"hash": "O0", "created_date": "2025-03-01T00:00:00.000Z"}
        assert data["pagination"] == {"page": 1, "limit": 15, "totalPages": 2, "totalCount": 20}
        assert executor.find.await_args.args[1] == {}


class TestDepositsWithdrawals:
    """Tests for GET /api/miners/deposits-withdrawals."""

    @pytest.mark.asyncio
    async def test_deposits_are_shaped(
        self,
        test_client: AsyncClient,
        executor_factory
    ):
        """Test records are filtered, sorted by timestamp and shaped."""
        executor = executor_factory(find={"deposits_withdrawals": [{
            "hash": "DEP1",
            "user_id": "miner_001",
            "type": "deposit",
            "amount": {"value": "500", "currency": SOLO},
            "timestamp": datetime(2025, 3, 1, 9, 0),
            "ledger_index": 87000001,
        }]})
        app.dependency_overrides[get_query_executor] = lambda: executor

        response = await test_client.get(
            "/api/miners/deposits-withdrawals",
            params={"type": "Deposit", "currency": SOLO}
        )

        assert response.status_code == 200
        record = response.json()["data"][0]
        assert record["id"] == "DEP1"
        assert record["amount"] == "500"
        assert record["currency"] == SOLO
        assert record["timestamp"] == "2025-03-01T09:00:00.000Z"
        assert record["fromAddress"] == "Unknown"

        call = executor.find.await_args
        assert call.args[1] == {"type": "deposit", "amount.currency": SOLO}
        assert call.kwargs["sort"] == {"timestamp": -1}
