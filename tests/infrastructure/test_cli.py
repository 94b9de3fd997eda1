"""End-to-end tests for the click CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOREFRONT_BASE_URL", "http://shop.test/api/products")
    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "WARNING")
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, list(args))

    return _run


def _json(result) -> dict:
    return json.loads(result.stdout)


def _add_product(run, code, price, category="Kitchen", stock="5"):
    result = run(
        "--json", "product", "add",
        "--code", code, "--title", f"Item {code}", "--description", "Something",
        "--price", price, "--stock", stock, "--category", category,
    )
    assert result.exit_code == 0, result.output
    return _json(result)["payload"]["id"]


class TestProductCommands:

    def test_add_and_show(self, run):
        product_id = _add_product(run, "MUG", "8.50")
        result = run("product", "show", "--id", product_id)
        assert result.exit_code == 0
        assert "Item MUG" in result.output
        assert "$8.50" in result.output

    def test_duplicate_code_reports_conflict(self, run):
        _add_product(run, "MUG", "8.50")
        result = run("--json", "product", "add",
                     "--code", "MUG", "--title", "Again", "--description", "x",
                     "--price", "1", "--stock", "1", "--category", "Kitchen")
        assert result.exit_code == 4
        envelope = _json(result)
        assert envelope["status"] == "error"
        assert "MUG" in envelope["message"]

    def test_list_paginates_with_links(self, run):
        for i, price in enumerate(["30", "10", "20"]):
            _add_product(run, f"P{i}", price)
        result = run("--json", "product", "list", "--limit", "2", "--sort", "asc")
        assert result.exit_code == 0
        envelope = _json(result)
        payload = envelope["payload"]
        assert [p["price"] for p in payload["items"]] == ["$10.00", "$20.00"]
        assert payload["total_pages"] == 2
        assert payload["has_next_page"] is True
        assert payload["prev_link"] is None
        assert payload["next_link"] == (
            "http://shop.test/api/products?limit=2&sort=asc&page=2"
        )

    def test_list_rejects_zero_limit(self, run):
        result = run("product", "list", "--limit", "0")
        assert result.exit_code == 2

    def test_list_status_filter(self, run):
        _add_product(run, "A", "1")
        run("product", "update", "--id", "1", "--no-status")
        _add_product(run, "B", "2")
        result = run("--json", "product", "list", "--status", "on")
        assert [p["code"] for p in _json(result)["payload"]["items"]] == ["B"]

    def test_update_and_delete(self, run):
        product_id = _add_product(run, "MUG", "8.50")
        result = run("--json", "product", "update", "--id", product_id, "--price", "9.75")
        assert _json(result)["payload"]["price"] == "$9.75"

        result = run("product", "delete", "--id", product_id)
        assert result.exit_code == 0
        result = run("product", "show", "--id", product_id)
        assert result.exit_code == 3
        assert "not found" in result.output


class TestCartCommands:

    def test_cart_lifecycle(self, run):
        mug = _add_product(run, "MUG", "8.50")
        plate = _add_product(run, "PLATE", "12.00")
        cart_id = _json(run("--json", "cart", "create"))["payload"]["id"]

        run("cart", "add", "--cart", cart_id, "--product", mug)
        result = run("--json", "cart", "add", "--cart", cart_id, "--product", mug)
        payload = _json(result)["payload"]
        assert [(i["product_id"], i["quantity"]) for i in payload["items"]] == [(mug, 2)]
        assert payload["items"][0]["product"]["code"] == "MUG"

        result = run("--json", "cart", "replace", "--cart", cart_id,
                     "--items", f"{plate}:3,{mug}:1")
        payload = _json(result)["payload"]
        assert [(i["product_id"], i["quantity"]) for i in payload["items"]] == [
            (plate, 3), (mug, 1),
        ]

        result = run("--json", "cart", "set", "--cart", cart_id,
                     "--product", plate, "--quantity", "5")
        assert _json(result)["payload"]["total_quantity"] == 6

        result = run("--json", "cart", "remove", "--cart", cart_id, "--product", mug)
        assert len(_json(result)["payload"]["items"]) == 1

        result = run("cart", "clear", "--cart", cart_id)
        assert result.exit_code == 0
        assert "(empty)" in result.output

    def test_set_quantity_zero_rejected(self, run):
        mug = _add_product(run, "MUG", "8.50")
        cart_id = _json(run("--json", "cart", "create"))["payload"]["id"]
        run("cart", "add", "--cart", cart_id, "--product", mug)
        result = run("cart", "set", "--cart", cart_id, "--product", mug, "--quantity", "0")
        assert result.exit_code == 2
        assert "must be positive" in result.output

    def test_unknown_cart(self, run):
        result = run("--json", "cart", "show", "--id", "99")
        assert result.exit_code == 3
        assert _json(result) == {"status": "error", "message": "Cart '99' not found"}

    def test_bad_items_format(self, run):
        cart_id = _json(run("--json", "cart", "create"))["payload"]["id"]
        result = run("cart", "replace", "--cart", cart_id, "--items", "oops")
        assert result.exit_code == 2
        assert "Invalid item format" in result.output
