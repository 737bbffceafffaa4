from myfast.db.database import Database
from myfast.db.models import Protocol
from myfast.db.repositories.settings_repo import get_setting


def list_protocols(db: Database) -> list[Protocol]:
    rows = db.all("SELECT * FROM protocols ORDER BY sort_order, name")
    return [Protocol.from_row(row) for row in rows]


def get_protocol(db: Database, protocol_id: str) -> Protocol | None:
    row = db.get("SELECT * FROM protocols WHERE id = ?", [protocol_id])
    return Protocol.from_row(row) if row else None


def get_default_protocol(db: Database) -> Protocol | None:
    """The user's ``defaultProtocol`` choice, falling back to the seeded default."""
    chosen = get_setting(db, "defaultProtocol")
    if chosen:
        protocol = get_protocol(db, chosen)
        if protocol is not None:
            return protocol

    row = db.get("SELECT * FROM protocols WHERE is_default = 1 ORDER BY sort_order LIMIT 1")
    return Protocol.from_row(row) if row else None
