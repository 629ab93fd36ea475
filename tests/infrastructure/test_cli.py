"""End-to-end CLI tests against a JSON store in a temporary directory."""

import logging
import re

import pytest
import structlog
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOREFRONT_STORE", "json")
    yield CliRunner()
    # Each invocation points the root handler at that run's stderr.
    logging.getLogger().handlers = []
    structlog.reset_defaults()


def _create_product(runner, stock: int = 5) -> str:
    result = runner.invoke(
        cli,
        ["product", "create", "--name", "Widget", "--price", "15", "--stock", str(stock)],
    )
    assert result.exit_code == 0, result.output
    return re.search(r"Product ([0-9a-f]{32})", result.output).group(1)


class TestProductCommands:

    def test_create_stdout_is_only_the_confirmation(self, runner):
        result = runner.invoke(cli, ["product", "create", "--name", "A", "--price", "1"])
        assert result.exit_code == 0
        assert re.fullmatch(r"Product [0-9a-f]{32} 'A' created at 1.00\n", result.stdout)

    def test_component_events_are_logged_to_stderr(self, runner):
        result = runner.invoke(cli, ["product", "create", "--name", "A", "--price", "1"])
        assert "Product created" in result.stderr
        assert "Product created" not in result.stdout

    def test_create_prints_price(self, runner):
        result = runner.invoke(cli, ["product", "create", "--name", "Widget", "--price", "15"])
        assert result.exit_code == 0
        assert "'Widget' created at 15.00" in result.output

    def test_create_negative_price_fails(self, runner):
        result = runner.invoke(cli, ["product", "create", "--name", "Widget", "--price", "-1"])
        assert result.exit_code != 0
        assert "price cannot be negative" in result.output

    def test_show(self, runner):
        product_id = _create_product(runner)
        result = runner.invoke(cli, ["product", "show", "--id", product_id])
        assert result.exit_code == 0
        assert "Widget" in result.output

    def test_stock_adjustment_persists(self, runner):
        product_id = _create_product(runner, stock=5)
        result = runner.invoke(cli, ["product", "stock", "--id", product_id, "--delta=-2"])
        assert result.exit_code == 0
        assert "stock is now 3" in result.output

        shown = runner.invoke(cli, ["product", "show", "--id", product_id])
        assert "Stock:       3" in shown.output

    def test_insufficient_stock_fails(self, runner):
        product_id = _create_product(runner, stock=1)
        result = runner.invoke(cli, ["product", "stock", "--id", product_id, "--delta=-5"])
        assert result.exit_code != 0
        assert "insufficient stock" in result.output

    def test_update(self, runner):
        product_id = _create_product(runner)
        result = runner.invoke(
            cli, ["product", "update", "--id", product_id, "--name", "Gizmo", "--price", "20"]
        )
        assert result.exit_code == 0
        assert "Gizmo" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["product", "list"])
        assert result.exit_code == 0
        assert "No products found." in result.output

    def test_list(self, runner):
        _create_product(runner)
        _create_product(runner)
        result = runner.invoke(cli, ["product", "list"])
        assert "2 of 2 products" in result.output

    def test_unknown_product(self, runner):
        result = runner.invoke(cli, ["product", "show", "--id", "0" * 32])
        assert result.exit_code != 0
        assert "product not found" in result.output


class TestOrderCommands:

    def _create_order(self, runner) -> str:
        result = runner.invoke(
            cli, ["order", "create", "--user", "u1", "--items", "p1:2:10.0,p2:1:5.0"]
        )
        assert result.exit_code == 0, result.output
        return re.search(r"Order ([0-9a-f]{32})", result.output).group(1)

    def test_create_shows_total(self, runner):
        result = runner.invoke(
            cli, ["order", "create", "--user", "u1", "--items", "p1:2:10.0,p2:1:5.0"]
        )
        assert result.exit_code == 0
        assert "status=pending" in result.output
        assert "25.00" in result.output

    def test_bad_item_format(self, runner):
        result = runner.invoke(cli, ["order", "create", "--user", "u1", "--items", "p1:2"])
        assert result.exit_code != 0
        assert "Invalid item format" in result.output

    def test_zero_quantity_fails(self, runner):
        result = runner.invoke(cli, ["order", "create", "--user", "u1", "--items", "p1:0:1"])
        assert result.exit_code != 0
        assert "Quantity must be positive" in result.output

    def test_status(self, runner):
        order_id = self._create_order(runner)
        result = runner.invoke(cli, ["order", "status", "--id", order_id, "--set", "shipped"])
        assert result.exit_code == 0
        assert "status set to 'shipped'" in result.output

        shown = runner.invoke(cli, ["order", "show", "--id", order_id])
        assert "status=shipped" in shown.output

    def test_list_by_user(self, runner):
        self._create_order(runner)
        result = runner.invoke(cli, ["order", "list", "--user", "u1"])
        assert "1 of 1 orders" in result.output
        result = runner.invoke(cli, ["order", "list", "--user", "nobody"])
        assert "No orders found." in result.output


def test_invalid_settings_fail_before_any_command(runner, monkeypatch):
    monkeypatch.setenv("STOREFRONT_STORE", "mongo")
    result = runner.invoke(cli, ["product", "list"])
    assert result.exit_code != 0
    assert "STOREFRONT_STORE" in result.stderr
