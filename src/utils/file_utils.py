from pathlib import Path


def add_suffix_to_top_level(rel_path: Path, suffix: str) -> Path:
    """
    Add a suffix to the top-level directory name of a relative path.

    Example:
        'corpus/subdir/file1.txt'
        + '_encoded'
        -> 'corpus_encoded/subdir/file1.txt'
    """
    parts = list(rel_path.parts)
    if not parts:
        return Path()
    parts[0] = parts[0] + suffix
    return Path(*parts)


def suffix_filename(path: Path, suffix: str) -> Path:
    """
    Add a suffix before the file extension.

    Example:
        file1.txt + '_encoded' -> file1_encoded.txt
        README   + '_decoded'  -> README_decoded
    """
    if path.suffix:
        return path.with_name(path.stem + suffix + path.suffix)
    return path.with_name(path.name + suffix)


def derive_output_path(path: Path, suffix: str, extension: str = ".txt") -> Path:
    """
    Cut the file name at its last '.', then append suffix and extension.

    Example:
        lorem.txt         + '_encoded' -> lorem_encoded.txt
        lorem_encoded.txt + '_decoded' -> lorem_encoded_decoded.txt
        archive.tar.gz    + '_encoded' -> archive.tar_encoded.txt
        README            + '_encoded' -> README_encoded.txt
        .bashrc           + '_encoded' -> .bashrc_encoded.txt

    Unlike a literal cut at the last '.', a dot at position 0 is kept, so
    dotfiles do not collapse to a bare '_encoded.txt'.
    """
    path = Path(path)
    name = path.name
    index = name.rfind(".")
    # A leading dot (".bashrc") names the file, it is not an extension.
    stem = name[:index] if index > 0 else name
    return path.with_name(stem + suffix + extension)
