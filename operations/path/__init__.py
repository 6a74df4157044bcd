from .names import Basename, Dirname, FileExtension, JoinPath, NormalizePath

OPERATIONS = [Basename, Dirname, FileExtension, JoinPath, NormalizePath]

__all__ = ["OPERATIONS", "Basename", "Dirname", "FileExtension", "JoinPath", "NormalizePath"]
