import sys
import tempfile
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402
from src.app.server import app  # noqa: E402
from src.connectors.tickets_router import get_store  # noqa: E402
from src.storage.ticket_store import TicketStore  # noqa: E402

# Usar un directorio temporal para no tocar json_data/
tmp = Path(tempfile.mkdtemp(prefix="tickets_smoke_"))
store = TicketStore(tmp)
app.dependency_overrides[get_store] = lambda: store

client = TestClient(app)
steps = [
    ("GET", "/tickets", None),
    ("POST", "/tickets", {"id": "T1", "customerName": "Alice", "issueType": "billing", "status": "open"}),
    ("POST", "/tickets", {"id": "T2", "customerName": "Bob"}),
    ("PATCH", "/tickets/T1", {"status": "resolved"}),
    ("PATCH", "/tickets/nope", {"status": "resolved"}),
    ("GET", "/tickets", None),
    ("DELETE", "/tickets/T1", None),
    ("GET", "/tickets", None),
]
for method, path, body in steps:
    r = client.request(method, path, json=body)
    print(f">> {method} {path} {body!r}\n{r.status_code} {r.json()}\n")

print(f"Backing file: {store.file}")
