from . import encoding, env, fs, generate, hashing, path, serialization, shell, validation

ALL_OPERATIONS = [
    *fs.OPERATIONS,
    *env.OPERATIONS,
    *shell.OPERATIONS,
    *hashing.OPERATIONS,
    *encoding.OPERATIONS,
    *serialization.OPERATIONS,
    *path.OPERATIONS,
    *validation.OPERATIONS,
    *generate.OPERATIONS,
]

__all__ = ["ALL_OPERATIONS"]
