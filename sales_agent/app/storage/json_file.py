"""Flat JSON file store: the in-memory collections mirrored to one document."""

import json
import logging
import os
import tempfile

from pydantic import ValidationError

from sales_agent.app.schemas.email import EmailLog, EmailTemplate
from sales_agent.app.schemas.follow_up import FollowUp
from sales_agent.app.schemas.lead import Lead
from sales_agent.app.schemas.meeting import Meeting
from sales_agent.app.storage.memory import MemoryStore

logger = logging.getLogger(__name__)

# document key -> (store attribute, record type)
COLLECTIONS = {
    "leads": ("leads", Lead),
    "emailTemplates": ("templates", EmailTemplate),
    "emailLogs": ("email_logs", EmailLog),
    "meetings": ("meetings", Meeting),
    "followUps": ("follow_ups", FollowUp),
}


class JsonFileStore(MemoryStore):
    """Loads the whole document at start-up and rewrites it after every mutation.

    No schema is enforced on the document beyond what the record models accept:
    an unreadable document starts empty and individual records that fail to
    validate are skipped with a warning.
    """

    backend_name = "json"

    def __init__(self, data_path: str) -> None:
        super().__init__()
        self.data_path = data_path
        self._ensure_file_exists()
        self._load_data()

    def _ensure_file_exists(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.data_path))
        os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.data_path):
            self._save_data()

    def _load_data(self) -> None:
        try:
            with open(self.data_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s (%s); starting with empty collections", self.data_path, exc)
            return
        if not isinstance(data, dict):
            return

        for key, (attribute, model) in COLLECTIONS.items():
            collection = getattr(self, attribute)
            for raw in data.get(key) or []:
                try:
                    record = model.model_validate(raw)
                except ValidationError as exc:
                    logger.warning("Skipping invalid %s record in %s: %s", key, self.data_path, exc.errors()[:1])
                    continue
                collection[record.id] = record

    def _save_data(self) -> None:
        # mutations wait until the new document is in place
        with self._lock:
            data = {
                key: [record.model_dump(mode="json", by_alias=True) for record in getattr(self, attribute).values()]
                for key, (attribute, _model) in COLLECTIONS.items()
            }
            directory = os.path.dirname(os.path.abspath(self.data_path))
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".sales-agent-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.data_path)
            except Exception:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise

    def _changed(self) -> None:
        self._save_data()
