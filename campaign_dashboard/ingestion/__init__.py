from .loader import load_marketing_data, parse_marketing_data

__all__ = ["load_marketing_data", "parse_marketing_data"]
