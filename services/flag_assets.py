"""Maps country names to flag images under ``static/flags``."""

FLAG_DIR = "flags"


def flag_slug(country: str) -> str:
    return country.strip().lower().replace(" ", "-")


def flag_filename(country: str) -> str:
    # no existence check; a missing image renders its alt text
    return f"{FLAG_DIR}/{flag_slug(country)}.svg"
