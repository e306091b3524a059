import os
import pytest
import sys
from pathlib import Path
from PIL import Image

# Run Qt headless unless a platform is explicitly chosen
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import bbox_annotator
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from bbox_annotator.core import GestureController, ImageSize, SelectionStore


# Common test fixtures
@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple 200x100 test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def ids():
    """Deterministic id factory: box-1, box-2, ..."""
    counter = {"n": 0}

    def make():
        counter["n"] += 1
        return f"box-{counter['n']}"

    return make


@pytest.fixture
def controller(store, ids):
    """Controller over a 1000x500 image with predictable ids."""
    ctrl = GestureController(store, id_factory=ids)
    ctrl.set_image_size(ImageSize(1000, 500))
    return ctrl
