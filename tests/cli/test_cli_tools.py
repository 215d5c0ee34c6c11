"""Tests for ``shopify-mcp tools`` CLI commands."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from shopify_mcp.cli import main

_NO_ENV = {"SHOPIFY_DOMAIN": None, "SHOPIFY_TOKEN": None, "SHOPIFY_API_VERSION": None}
_CREDENTIALS = ["--domain", "shop.myshopify.com", "--token", "shpat_test"]


def _client_class(*responses: dict) -> MagicMock:
    client = MagicMock()
    client.execute = AsyncMock(side_effect=list(responses))
    client_cls = MagicMock()
    client_cls.return_value.__aenter__ = AsyncMock(return_value=client)
    client_cls.return_value.__aexit__ = AsyncMock(return_value=None)
    return client_cls


class TestToolsList:
    def test_list_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list"])

        assert result.exit_code == 0
        assert "count-entities" in result.output
        assert "delete-entity-by-name" in result.output
        assert "update-resource-address" in result.output

    def test_list_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list", "--json"])

        assert result.exit_code == 0
        assert '"name": "count-entities"' in result.output
        assert '"inputSchema"' in result.output
        assert "get-products-count" not in result.output


class TestToolsCall:
    def test_call_prints_text(self) -> None:
        client_cls = _client_class({"data": {"products": {"edges": []}}})
        runner = CliRunner()
        with patch("shopify_mcp.shopify.client.ShopifyClient", client_cls):
            result = runner.invoke(
                main,
                ["tools", "call", "delete-entity-by-name", "--args", '{"productName": "Mug"}', *_CREDENTIALS],
                env=_NO_ENV,
            )

        assert result.exit_code == 0
        assert 'No product found with title exactly matching "Mug".' in result.output
        settings = client_cls.call_args.args[0]
        assert settings.domain == "shop.myshopify.com"

    def test_unknown_tool(self) -> None:
        client_cls = _client_class()
        runner = CliRunner()
        with patch("shopify_mcp.shopify.client.ShopifyClient", client_cls):
            result = runner.invoke(main, ["tools", "call", "frobnicate", *_CREDENTIALS], env=_NO_ENV)

        assert result.exit_code == 1
        assert "Error -32601" in result.output
        assert "Unknown tool: frobnicate" in result.output

    def test_invalid_arguments(self) -> None:
        client_cls = _client_class()
        runner = CliRunner()
        with patch("shopify_mcp.shopify.client.ShopifyClient", client_cls):
            result = runner.invoke(
                main,
                ["tools", "call", "update-resource-address", "--args", '{"updates": {}}', *_CREDENTIALS],
                env=_NO_ENV,
            )

        assert result.exit_code == 1
        assert "Error -32602" in result.output

    def test_bad_args_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["tools", "call", "count-entities", "--args", "{nope", *_CREDENTIALS], env=_NO_ENV
        )

        assert result.exit_code == 1
        assert "Invalid --args JSON" in result.output

    def test_args_must_be_object(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["tools", "call", "count-entities", "--args", "[1]", *_CREDENTIALS], env=_NO_ENV
        )

        assert result.exit_code == 1
        assert "expected an object" in result.output

    def test_missing_credentials(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "call", "count-entities"], env=_NO_ENV)

        assert result.exit_code == 1
        assert "Configuration error" in result.output
