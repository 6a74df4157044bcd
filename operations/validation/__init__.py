from .predicates import IsEmail, IsIp, IsUrl, IsUuid, MatchesRegex

OPERATIONS = [IsEmail, IsUrl, IsIp, IsUuid, MatchesRegex]

__all__ = ["OPERATIONS", "IsEmail", "IsIp", "IsUrl", "IsUuid", "MatchesRegex"]
