"""Write payloads as JSON files."""

from pathlib import Path

from mdprompt.errors import WriteError
from mdprompt.models import Record
from mdprompt.utils.paths import output_path


class JsonFileWriter:
    """Writes each payload to ``<output_root>/<record.name>.json``.

    Existing files are overwritten. Records with the same name from
    different folders therefore replace each other.
    """

    def __init__(self, output_root: Path | str, create: bool = False):
        self.output_root = Path(output_root)
        self.create = create
        self._prepared = False

    def _prepare(self) -> None:
        if self.create and not self._prepared:
            try:
                self.output_root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise WriteError(str(self.output_root), e.strerror or str(e)) from e
        self._prepared = True

    def write(self, record: Record, payload: str) -> Path:
        """Write one payload, replacing any previous file of the same name."""
        self._prepare()
        path = output_path(self.output_root, record.name)
        try:
            path.write_bytes(payload.encode("utf-8"))
        except (OSError, UnicodeEncodeError) as e:
            reason = getattr(e, "strerror", None) or str(e)
            raise WriteError(str(path), reason) from e
        return path
