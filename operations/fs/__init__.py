from .data import ReadJsonFile, ReadTomlFile, ReadYamlFile
from .listing import Glob, ListDir
from .predicates import IsDir, IsFile, IsSymlink
from .read import ReadFile, ReadLines
from .stat import FileExists, FileModified, FileSize

OPERATIONS = [
    ReadFile,
    ReadLines,
    FileExists,
    ListDir,
    Glob,
    FileSize,
    FileModified,
    IsFile,
    IsDir,
    IsSymlink,
    ReadJsonFile,
    ReadYamlFile,
    ReadTomlFile,
]

__all__ = [
    "OPERATIONS",
    "FileExists",
    "FileModified",
    "FileSize",
    "Glob",
    "IsDir",
    "IsFile",
    "IsSymlink",
    "ListDir",
    "ReadFile",
    "ReadJsonFile",
    "ReadLines",
    "ReadTomlFile",
    "ReadYamlFile",
]
