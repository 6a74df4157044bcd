from .lookup import FilterEnv, GetEnv

OPERATIONS = [GetEnv, FilterEnv]

__all__ = ["OPERATIONS", "FilterEnv", "GetEnv"]
