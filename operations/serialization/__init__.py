from .formats import ParseJson, ParseToml, ParseYaml, ToJson, ToYaml

OPERATIONS = [ToJson, ToYaml, ParseJson, ParseYaml, ParseToml]

__all__ = ["OPERATIONS", "ParseJson", "ParseToml", "ParseYaml", "ToJson", "ToYaml"]
