from .yahoo_client import YahooFinanceAPIError, fetch_chart, search_symbols

__all__ = ["YahooFinanceAPIError", "fetch_chart", "search_symbols"]
