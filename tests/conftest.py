import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv(ROOT / ".env")


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def receiver(upload_dir: Path):
    from spend.ingest.receiver import FileReceiver

    return FileReceiver(upload_dir=upload_dir, max_bytes=100_000)


@pytest.fixture
def summary_pipeline(receiver):
    from spend.ingest.pipeline import SummaryPipeline

    return SummaryPipeline(receiver=receiver)
