"""
Form store persisted as JSON files.

Layout under the storage directory:
    forms/{form_id}.json
    submissions/{submission_id}.json

Files are written atomically (temp file, fsync, rename).
"""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from mindform.errors import StorageError
from mindform.models.submission import StoredForm, Submission
from mindform.storage.memory import InMemoryFormStore

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, content: str) -> None:
    temp_path = path.with_suffix(".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        temp_path.replace(path)
    except OSError as e:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove temp file %s", temp_path)
        raise StorageError(f"Failed to write {path.name}: {e}") from e


class JsonFileFormStore(InMemoryFormStore):
    """FormStore that keeps an in-memory index and mirrors it to disk."""

    def __init__(self, root: str | Path):
        super().__init__()
        self.root = Path(root)
        self.forms_dir = self.root / "forms"
        self.submissions_dir = self.root / "submissions"
        self.forms_dir.mkdir(parents=True, exist_ok=True)
        self.submissions_dir.mkdir(parents=True, exist_ok=True)
        self._load()

    def _load(self) -> None:
        for path in sorted(self.forms_dir.glob("*.json")):
            try:
                form = StoredForm.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, ValidationError) as e:
                logger.warning("Skipping unreadable form file %s: %s", path, e)
                continue
            self._forms[form.id] = form

        for path in sorted(self.submissions_dir.glob("*.json")):
            try:
                submission = Submission.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, ValidationError) as e:
                logger.warning("Skipping unreadable submission file %s: %s", path, e)
                continue
            self._submissions[submission.id] = submission

        logger.info(
            "Loaded %d form(s) and %d submission(s) from %s",
            len(self._forms),
            len(self._submissions),
            self.root,
        )

    def _save_form(self, form: StoredForm) -> None:
        content = json.dumps(form.model_dump(mode="json", by_alias=True), indent=2)
        _atomic_write(self.forms_dir / f"{form.id}.json", content)
        super()._save_form(form)

    def _save_submission(self, submission: Submission) -> None:
        content = json.dumps(submission.model_dump(mode="json"), indent=2)
        _atomic_write(self.submissions_dir / f"{submission.id}.json", content)
        super()._save_submission(submission)

    def _remove_submission(self, submission_id: str) -> None:
        try:
            (self.submissions_dir / f"{submission_id}.json").unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete submission {submission_id}: {e}") from e
        super()._remove_submission(submission_id)
