from products_api.cli.main import cli as main

__all__ = ["main"]
