from .codec import Base64Decode, Base64Encode, HexDecode, HexEncode

OPERATIONS = [Base64Encode, Base64Decode, HexEncode, HexDecode]

__all__ = ["OPERATIONS", "Base64Decode", "Base64Encode", "HexDecode", "HexEncode"]
