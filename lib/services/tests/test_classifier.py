from pathlib import Path

import pytest
from PIL import Image

from pasterbar_core.config import ClipboardWatcherSettings
from pasterbar_core.constants import ClipboardType
from pasterbar_services.classifier import ContentClassifier, ImageMaterializer
from pasterbar_services.models import Candidate, ClipboardPayload


# region Text


def test_text_payload_yields_text_candidate(classifier):
    candidates = list(classifier.classify(ClipboardPayload(text="hello")))
    assert candidates == [Candidate(content="hello", type=ClipboardType.TEXT)]


@pytest.mark.parametrize("payload", [ClipboardPayload(), ClipboardPayload(text="")])
def test_empty_payload_yields_nothing(classifier, payload):
    assert list(classifier.classify(payload)) == []


# endregion
# region File references


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/tmp/a.png", ClipboardType.IMAGE),
        ("/tmp/a.PNG", ClipboardType.IMAGE),
        ("/tmp/photo.JPeG", ClipboardType.IMAGE),
        ("/tmp/scan.tiff", ClipboardType.IMAGE),
        ("/tmp/live.heic", ClipboardType.IMAGE),
        ("/tmp/a.txt", ClipboardType.FILE),
        ("/tmp/archive.tar.gz", ClipboardType.FILE),
        ("/tmp/no_extension", ClipboardType.FILE),
        ("/tmp/vector.svg", ClipboardType.FILE),
    ],
)
def test_file_reference_classification(classifier, path, expected):
    (candidate,) = classifier.classify(ClipboardPayload(file_paths=[path]))
    assert candidate.type is expected
    assert candidate.content == path


def test_relative_file_reference_becomes_absolute(classifier):
    (candidate,) = classifier.classify(ClipboardPayload(file_paths=["notes.txt"]))
    assert Path(candidate.content).is_absolute()
    assert Path(candidate.content).name == "notes.txt"


def test_each_file_reference_is_a_candidate(classifier):
    payload = ClipboardPayload(file_paths=["/tmp/a.png", "/tmp/a.txt", "/tmp/b.gif"])
    candidates = list(classifier.classify(payload))
    assert [(c.content, c.type) for c in candidates] == [
        ("/tmp/a.png", ClipboardType.IMAGE),
        ("/tmp/a.txt", ClipboardType.FILE),
        ("/tmp/b.gif", ClipboardType.IMAGE),
    ]


def test_file_references_take_precedence(classifier, red_square, watcher_settings):
    payload = ClipboardPayload(
        file_paths=["/tmp/a.txt"], images=[red_square], text="/tmp/a.txt"
    )
    candidates = list(classifier.classify(payload))
    assert len(candidates) == 1
    assert candidates[0].type is ClipboardType.FILE
    assert not watcher_settings.image_directory.exists() or not any(
        watcher_settings.image_directory.iterdir()
    )


def test_custom_image_extensions(tmp_path):
    settings = ClipboardWatcherSettings(
        image_directory=tmp_path / "images", image_extensions=("webp",)
    )
    custom = ContentClassifier(settings)
    assert custom.is_image_path(Path("/tmp/a.WEBP"))
    assert not custom.is_image_path(Path("/tmp/a.png"))


# endregion
# region Rendered images


def test_image_is_materialized(classifier, red_square, watcher_settings):
    (candidate,) = classifier.classify(
        ClipboardPayload(images=[red_square], text="ignored")
    )
    path = Path(candidate.content)
    assert candidate.type is ClipboardType.IMAGE
    assert path.is_absolute()
    assert path.parent == watcher_settings.image_directory.absolute()
    assert path.suffix == ".png"
    with Image.open(path) as saved:
        assert saved.format == "PNG"
        assert saved.size == (8, 8)
        assert saved.getpixel((0, 0)) == (255, 0, 0)


def test_each_image_gets_a_unique_file(classifier, red_square):
    payload = ClipboardPayload(images=[red_square, red_square.copy()])
    candidates = list(classifier.classify(payload))
    assert len(candidates) == 2
    assert candidates[0].content != candidates[1].content
    assert all(Path(c.content).exists() for c in candidates)


def test_unencodable_image_is_dropped(classifier, watcher_settings):
    cmyk = Image.new("CMYK", (4, 4))
    payload = ClipboardPayload(images=[cmyk], text="fallback")
    assert list(classifier.classify(payload)) == []
    assert not watcher_settings.image_directory.exists() or not any(
        watcher_settings.image_directory.iterdir()
    )


def test_unwritable_directory_drops_image(tmp_path, red_square):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    materializer = ImageMaterializer(blocker / "copy_image")
    assert materializer.materialize(red_square) is None
    assert materializer.ensure_directory() is False


def test_failed_image_does_not_block_the_next(classifier, red_square):
    payload = ClipboardPayload(images=[Image.new("CMYK", (4, 4)), red_square])
    candidates = list(classifier.classify(payload))
    assert len(candidates) == 1
    assert Path(candidates[0].content).exists()


# endregion
