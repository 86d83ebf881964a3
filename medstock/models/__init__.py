import importlib

from medstock.models.medicine import Medicine
from medstock.models.stock_transaction import StockTransaction


def import_all_models() -> None:
    for module_name in (
        "medstock.models.medicine",
        "medstock.models.stock_transaction",
    ):
        importlib.import_module(module_name)


__all__ = ["Medicine", "StockTransaction", "import_all_models"]
