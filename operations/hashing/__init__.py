from .digest import Md5, Sha1, Sha256, Sha512

OPERATIONS = [Md5, Sha1, Sha256, Sha512]

__all__ = ["OPERATIONS", "Md5", "Sha1", "Sha256", "Sha512"]
