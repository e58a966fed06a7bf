"""Site context loading from the site JSON config"""

from pathlib import Path

from pydantic import ValidationError

from blockpub.core.models import SiteContext


def load_site_context(path: Path) -> SiteContext:
    """Load and validate the site JSON file; raises ValueError naming the file on failure."""
    try:
        return SiteContext.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ValueError(f"Invalid site config {path}: {e}") from e
