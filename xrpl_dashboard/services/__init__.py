"""Business services shared across modules: filters, shapers, pricing and polling."""
