"""Check if all modules can be imported."""

import importlib
import sys

MODULES = [
    "xrpl_dashboard.config.settings",
    "xrpl_dashboard.config.database",
    "xrpl_dashboard.config.trading",
    "xrpl_dashboard.core.dependencies",
    "xrpl_dashboard.repositories.query_executor",
    "xrpl_dashboard.repositories.order_repository",
    "xrpl_dashboard.services.shapers",
    "xrpl_dashboard.services.snapshot_poller",
    "xrpl_dashboard.modules.dashboard.router",
    "xrpl_dashboard.modules.transactions.router",
    "xrpl_dashboard.modules.miners.router",
    "xrpl_dashboard.modules.mongodb.router",
    "xrpl_dashboard.modules.health.router",
    "xrpl_dashboard.main",
]

def check_imports():
    """Check if key modules can be imported."""
    errors = []

    for name in MODULES:
        try:
            importlib.import_module(name)
            print(f"✓ {name}")
        except Exception as e:
            errors.append(f"✗ {name}: {e}")

    if errors:
        print("\n❌ Import Errors:")
        for error in errors:
            print(error)
        return 1
    else:
        print("\n✅ All imports successful!")
        return 0

if __name__ == "__main__":
    sys.exit(check_imports())
