from pathlib import Path

import click


def split_pairs(
    values: tuple[str, ...], separator: str, label: str, strip: bool = False
) -> dict[str, str]:
    """Parse ``name<separator>value`` command-line pairs into a mapping."""
    pairs: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition(separator)
        if strip:
            name, value = name.strip(), value.strip()
        if not sep or not name:
            raise click.BadParameter(
                f"'{item}' is not a valid {label}, expected name{separator}value"
            )
        pairs[name] = value
    return pairs


def read_images(values: tuple[str, ...]) -> dict[str, bytes]:
    images: dict[str, bytes] = {}
    for field_name, path in split_pairs(values, "=", "image").items():
        file_path = Path(path)
        if not file_path.is_file():
            raise click.BadParameter(f"Image file '{path}' does not exist")
        images[field_name] = file_path.read_bytes()
    return images
