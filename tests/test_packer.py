import sys
from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cssprite.core.errors import EmptyInputError
from cssprite.core.images import DecodedImage
from cssprite.core import packer
from cssprite.core.packer import Placement, compute_layout, pack_images


def _image(name, width, height, color=(255, 0, 0, 255), mode="RGBA"):
    img = Image.new(mode, (width, height), color if mode == "RGBA" else color[: len(mode)])
    return DecodedImage(name=name, width=width, height=height, pixels=img)


@pytest.fixture
def abc():
    images = (
        _image("A.png", 10, 50, (255, 0, 0, 255)),
        _image("B.png", 20, 40, (0, 255, 0, 255)),
        _image("C.png", 30, 60, (0, 0, 255, 255)),
    )
    yield images
    for image in images:
        image.close()


def test_three_images_make_a_single_row(abc):
    sheet, placements = pack_images(abc)
    try:
        assert (sheet.width, sheet.height) == (60, 60)
        assert sheet.pixels.size == (60, 60)
        assert sheet.pixels.mode == "RGBA"
        assert placements == (
            Placement("A.png", 10, 50, 0),
            Placement("B.png", 20, 40, 10),
            Placement("C.png", 30, 60, 30),
        )
    finally:
        sheet.close()


def test_pixels_land_at_their_offsets(abc):
    sheet, _ = pack_images(abc)
    try:
        assert sheet.pixels.getpixel((0, 0)) == (255, 0, 0, 255)
        assert sheet.pixels.getpixel((9, 49)) == (255, 0, 0, 255)
        assert sheet.pixels.getpixel((10, 0)) == (0, 255, 0, 255)
        assert sheet.pixels.getpixel((29, 39)) == (0, 255, 0, 255)
        assert sheet.pixels.getpixel((30, 59)) == (0, 0, 255, 255)
        assert sheet.pixels.getpixel((59, 0)) == (0, 0, 255, 255)
    finally:
        sheet.close()


def test_space_below_shorter_images_is_transparent(abc):
    sheet, placements = pack_images(abc)
    try:
        alpha = np.asarray(sheet.pixels.getchannel("A"))
    finally:
        sheet.close()

    covered = np.zeros_like(alpha, dtype=bool)
    for placement in placements:
        covered[: placement.height, placement.left : placement.right] = True
    assert (alpha[~covered] == 0).all()
    assert (alpha[covered] == 255).all()
    # A is 50 tall, B is 40 tall, the sheet is 60 tall
    assert (alpha[50:, 0:10] == 0).all()
    assert (alpha[40:, 10:30] == 0).all()


def test_single_image_sheet_matches_image():
    image = _image("only.png", 7, 3)
    sheet, placements = pack_images([image])
    try:
        assert (sheet.width, sheet.height) == (7, 3)
        assert placements == (Placement("only.png", 7, 3, 0),)
    finally:
        sheet.close()
        image.close()


def test_empty_input_rejected():
    with pytest.raises(EmptyInputError):
        pack_images([])
    with pytest.raises(EmptyInputError):
        compute_layout(())


@pytest.mark.parametrize(
    "sizes",
    [
        [(1, 1)],
        [(5, 9), (3, 2), (8, 8), (1, 12)],
        [(100, 4), (100, 4), (100, 4)],
    ],
)
def test_layout_offsets_are_running_sums(sizes):
    items = [SimpleNamespace(name=f"img{i}", width=w, height=h) for i, (w, h) in enumerate(sizes)]
    width, height, placements = compute_layout(items)

    assert width == sum(w for w, _ in sizes)
    assert height == max(h for _, h in sizes)
    assert [p.name for p in placements] == [item.name for item in items]
    for index, placement in enumerate(placements):
        assert placement.left == sum(w for w, _ in sizes[:index])
        assert placement.right <= width


def test_semi_transparent_pixels_keep_their_alpha():
    image = _image("ghost.png", 4, 4, (10, 20, 30, 128))
    sheet, _ = pack_images([image])
    try:
        assert sheet.pixels.getpixel((2, 2)) == (10, 20, 30, 128)
    finally:
        sheet.close()
        image.close()


def test_inputs_are_not_mutated():
    rgb = _image("rgb.jpg", 6, 6, (1, 2, 3, 255), mode="RGB")
    rgba = _image("rgba.png", 2, 9, (4, 5, 6, 7))
    before = (rgb.pixels.tobytes(), rgba.pixels.tobytes())

    sheet, _ = pack_images([rgb, rgba])
    sheet.close()

    assert rgb.pixels.mode == "RGB"
    assert (rgb.pixels.tobytes(), rgba.pixels.tobytes()) == before
    rgb.close()
    rgba.close()


def test_zero_width_entry_gets_an_empty_placement():
    items = [
        SimpleNamespace(name="a", width=3, height=2),
        SimpleNamespace(name="empty", width=0, height=5),
        SimpleNamespace(name="b", width=4, height=1),
    ]
    width, height, placements = compute_layout(items)
    assert (width, height) == (7, 5)
    assert placements[1] == Placement("empty", 0, 5, 3)
    assert placements[2].left == 3


@pytest.fixture
def canvas_spy(monkeypatch):
    created = []
    closed = []
    original_new = packer.Image.new
    original_close = Image.Image.close

    def new(*args, **kwargs):
        img = original_new(*args, **kwargs)
        created.append(img)
        return img

    def close(self):
        closed.append(self)
        original_close(self)

    monkeypatch.setattr(packer.Image, "new", new)
    monkeypatch.setattr(Image.Image, "close", close)
    return created, closed


def test_canvas_released_when_drawing_fails(abc, canvas_spy, monkeypatch):
    created, closed = canvas_spy
    original_paste = Image.Image.paste
    calls = []

    def paste(self, *args, **kwargs):
        calls.append(args)
        if len(calls) == 2:
            raise OSError("paste failed")
        return original_paste(self, *args, **kwargs)

    monkeypatch.setattr(Image.Image, "paste", paste)

    with pytest.raises(OSError, match="paste failed"):
        pack_images(abc)

    assert any(img is created[0] for img in closed)
    assert not any(img is image.pixels for img in closed for image in abc)


def test_canvas_released_when_conversion_fails(canvas_spy, monkeypatch):
    created, closed = canvas_spy
    first = _image("first.png", 2, 2)
    second = _image("second.jpg", 3, 3, mode="RGB")

    def convert(self, *args, **kwargs):
        raise ValueError("conversion failed")

    monkeypatch.setattr(Image.Image, "convert", convert)

    with pytest.raises(ValueError, match="conversion failed"):
        pack_images([first, second])

    assert any(img is created[0] for img in closed)
    first.close()
    second.close()
