"""End-to-end tests of the click CLI against a temporary data directory."""

import re

import pytest
from click.testing import CliRunner

from commerce.infrastructure import bootstrap, settings
from commerce.infrastructure.cli import main as cli_main
from commerce.infrastructure.cli.main import cli

ADDRESS_ARGS = [
    "--street", "1 Main St",
    "--city", "Springfield",
    "--state", "IL",
    "--zip", "62701",
    "--country", "USA",
]


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    monkeypatch.setattr(settings, "EVENT_WORKERS", 0)
    monkeypatch.setattr(bootstrap, "_publisher", None)
    # Keep the process-wide logging configuration untouched.
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)
    return CliRunner()


def _invoke(runner: CliRunner, *args: str):
    return runner.invoke(cli, list(args), catch_exceptions=False)


def _active_product(runner: CliRunner, sku: str, price: str) -> str:
    result = _invoke(runner, "product", "create", "--name", sku.title(), "--sku", sku, "--price", price)
    assert result.exit_code == 0, result.output
    product_id = re.search(r"Product (\S+) ", result.output).group(1)
    assert _invoke(runner, "product", "activate", "--id", product_id).exit_code == 0
    return product_id


def _new_order(runner: CliRunner, items: str) -> str:
    result = _invoke(runner, "order", "create", "--customer", "cust-1", *ADDRESS_ARGS, "--items", items)
    assert result.exit_code == 0, result.output
    return re.search(r"Order (\S+) created", result.output).group(1)


class TestProductCommands:

    def test_create_and_show(self, runner):
        result = _invoke(runner, "product", "create", "--name", "Widget", "--sku", "wid-1", "--price", "15")
        assert result.exit_code == 0
        assert "created at $15.00 (status=DRAFT)" in result.output
        product_id = re.search(r"Product (\S+) ", result.output).group(1)

        shown = _invoke(runner, "product", "show", "--id", product_id)
        assert "SKU:         WID-1" in shown.output
        assert "Purchasable: no" in shown.output

    def test_list(self, runner):
        assert "No products found." in _invoke(runner, "product", "list").output
        _active_product(runner, "wid-1", "15.00")
        listed = _invoke(runner, "product", "list", "--status", "active")
        assert "WID-1" in listed.output

    def test_activate_twice_fails(self, runner):
        product_id = _active_product(runner, "wid-1", "15.00")
        result = _invoke(runner, "product", "activate", "--id", product_id)
        assert result.exit_code == 1
        assert "[INVALID_STATUS_TRANSITION]" in result.output

    def test_price_update(self, runner):
        product_id = _active_product(runner, "wid-1", "15.00")
        result = _invoke(runner, "product", "price", "--id", product_id, "--price", "19.99")
        assert "price updated to $19.99" in result.output

    def test_missing_product(self, runner):
        result = _invoke(runner, "product", "show", "--id", "nope")
        assert result.exit_code == 1
        assert "[PRODUCT_NOT_FOUND]" in result.output

    def test_delete(self, runner):
        product_id = _active_product(runner, "wid-1", "15.00")
        assert _invoke(runner, "product", "delete", "--id", product_id).exit_code == 0
        assert _invoke(runner, "product", "show", "--id", product_id).exit_code == 1


class TestOrderCommands:

    def test_full_lifecycle(self, runner):
        widget = _active_product(runner, "wid-1", "10.00")
        gadget = _active_product(runner, "gad-1", "7.50")
        order_id = _new_order(runner, f"{widget}:1,{gadget}:2")

        result = _invoke(runner, "order", "set-customer", "--id", order_id,
                         "--name", "Alice", "--email", "alice@example.com")
        assert result.exit_code == 0, result.output

        submitted = _invoke(runner, "order", "submit", "--id", order_id)
        assert submitted.exit_code == 0, submitted.output
        assert re.search(r"submitted as ORD-\d{4}-\d{5}", submitted.output)
        assert "(total $34.99)" in submitted.output

        for status in ("CONFIRMED", "PROCESSING", "SHIPPED"):
            moved = _invoke(runner, "order", "status", "--id", order_id, "--to", status)
            assert f"is now {status}" in moved.output

        late = _invoke(runner, "order", "cancel", "--id", order_id, "--reason", "too late")
        assert late.exit_code == 1
        assert "[INVALID_STATUS_TRANSITION]" in late.output

        shown = _invoke(runner, "order", "show", "--id", order_id)
        assert "(status=SHIPPED)" in shown.output
        assert "Wid-1" in shown.output

    def test_item_commands(self, runner):
        widget = _active_product(runner, "wid-1", "10.00")
        gadget = _active_product(runner, "gad-1", "7.50")
        order_id = _new_order(runner, f"{widget}:1")

        added = _invoke(runner, "order", "add-item", "--id", order_id,
                        "--product", gadget, "--quantity", "2")
        assert "subtotal is now $25.00" in added.output

        changed = _invoke(runner, "order", "set-quantity", "--id", order_id,
                          "--product", widget, "--quantity", "3")
        assert "subtotal is now $45.00" in changed.output

        removed = _invoke(runner, "order", "remove-item", "--id", order_id, "--product", gadget)
        assert "subtotal is now $30.00" in removed.output

    def test_generic_status_cannot_submit(self, runner):
        widget = _active_product(runner, "wid-1", "10.00")
        order_id = _new_order(runner, f"{widget}:1")
        result = _invoke(runner, "order", "status", "--id", order_id, "--to", "PENDING")
        assert result.exit_code == 1
        assert "[INVALID_STATUS_TRANSITION]" in result.output

    def test_deactivated_product_blocks_submit(self, runner):
        widget = _active_product(runner, "wid-1", "10.00")
        order_id = _new_order(runner, f"{widget}:1")
        _invoke(runner, "order", "set-customer", "--id", order_id,
                "--name", "Alice", "--email", "alice@example.com")
        _invoke(runner, "product", "deactivate", "--id", widget)

        result = _invoke(runner, "order", "submit", "--id", order_id)
        assert result.exit_code == 1
        assert "[PRODUCT_NOT_AVAILABLE]" in result.output

    def test_below_minimum(self, runner):
        cheap = _active_product(runner, "chp-1", "2.00")
        result = _invoke(runner, "order", "create", "--customer", "cust-1", *ADDRESS_ARGS,
                         "--items", f"{cheap}:1")
        assert result.exit_code == 1
        assert "[ORDER_BELOW_MINIMUM]" in result.output

    def test_bad_items_format(self, runner):
        result = runner.invoke(cli, ["order", "create", "--customer", "c", *ADDRESS_ARGS,
                                     "--items", "no-quantity"])
        assert result.exit_code == 2

    def test_list_stats_and_delete(self, runner):
        widget = _active_product(runner, "wid-1", "10.00")
        first = _new_order(runner, f"{widget}:1")
        _new_order(runner, f"{widget}:2")

        listed = _invoke(runner, "order", "list", "--customer", "cust-1")
        assert first in listed.output

        stats = _invoke(runner, "order", "stats")
        assert "Orders:        2" in stats.output
        assert "Revenue:       $30.00" in stats.output
        assert "Average order: $15.00" in stats.output

        assert _invoke(runner, "order", "delete", "--id", first).exit_code == 0
        assert "Orders:        1" in _invoke(runner, "order", "stats").output
