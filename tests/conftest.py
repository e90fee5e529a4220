import pytest

from factories import RecordingCanvas, make_record, png_bytes


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def record():
    return make_record()


@pytest.fixture
def logo_png():
    return png_bytes((320, 106), "navy")


@pytest.fixture
def cover_png():
    return png_bytes((600, 850), "darkgreen")


@pytest.fixture
def signature_png():
    return png_bytes((300, 90), "white")
