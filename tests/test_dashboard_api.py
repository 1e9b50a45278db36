"""
Tests for the dashboard statistics endpoint.
"""

import pytest
from httpx import AsyncClient

from xrpl_dashboard.core.dependencies import get_query_executor
from xrpl_dashboard.main import app
from xrpl_dashboard.shared.exceptions import DatabaseUnavailable, QueryExecutionError

RLUSD = "524C555344000000000000000000000000000000"


class TestDashboardStats:
    """Tests for GET /api/dashboard/stats."""

    @pytest.mark.asyncio
    async def test_stats_aggregate_users_wallets_and_volume(
        self,
        test_client: AsyncClient,
        executor_factory
    ):
        """Test stats combine user, transaction and trade collections."""
        executor = executor_factory(
            find={
                "users": [
                    {"id": "miner_001", "wallets": ["rA", "rB"]},
                    {"id": "miner_002", "wallets": ["rB"]},
                ],
                "trades": [
                    {"TakerGets": {"value": "100", "currency": "XRP"}},
                    {"TakerPays": {"value": "40", "currency": RLUSD}},
                ],
            },
            count={"transactions": 12},
        )
        app.dependency_overrides[get_query_executor] = lambda: executor

        response = await test_client.get("/api/dashboard/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["stats"]["userCount"] == 2
        assert data["stats"]["walletCount"] == 2
        assert data["stats"]["transactionCount"] == 12
        assert data["stats"]["totalVolume"] == 140
        assert data["stats"]["assetVolumes"] == {"XRP": 100, RLUSD: 40}
        assert data["stats"]["assetSymbols"][RLUSD] == "RLUSD"

    @pytest.mark.asyncio
    async def test_stats_scoped_to_user(
        self,
        test_client: AsyncClient,
        executor_factory
    ):
        """Test userId restricts users by id and trades by identity aliases."""
        executor = executor_factory()
        app.dependency_overrides[get_query_executor] = lambda: executor

        response = await test_client.get("/api/dashboard/stats", params={"userId": "miner_001"})

        assert response.status_code == 200
        executor.find.assert_any_await("users", {"id": "miner_001"})
        trade_call = next(
            call for call in executor.find.await_args_list if call.args[0] == "trades"
        )
        assert {"user_id": "miner_001"} in trade_call.args[1]["$or"]
        assert trade_call.kwargs["sort"] == {"_id": -1}

    @pytest.mark.asyncio
    async def test_stats_query_failure_returns_500(
        self,
        test_client: AsyncClient,
        executor_factory
    ):
        """Test a failing query answers the dashboard error envelope."""
        executor = executor_factory()
        executor.count.side_effect = QueryExecutionError("count", "transactions", RuntimeError("boom"))
        app.dependency_overrides[get_query_executor] = lambda: executor

        response = await test_client.get("/api/dashboard/stats")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"].startswith("Failed to fetch dashboard statistics:")

    @pytest.mark.asyncio
    async def test_stats_without_database_returns_500(self, test_client: AsyncClient):
        """Test a database that cannot be resolved answers 500."""
        def unavailable():
            raise DatabaseUnavailable()

        app.dependency_overrides[get_query_executor] = unavailable

        response = await test_client.get("/api/dashboard/stats")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "No usable MongoDB database could be resolved",
        }


class TestRoot:
    """Tests for the root endpoint."""

    @pytest.mark.asyncio
    async def test_root_reports_running(self, test_client: AsyncClient):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"
