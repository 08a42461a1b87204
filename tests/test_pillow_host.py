import pytest
from PIL import Image

from truecolors.host import HostApi
from truecolors.patch import install
from truecolors.pillow_host import PillowImageData


def test_new_image_is_transparent_black() -> None:
    image = PillowImageData.new(3, 2)

    assert image.get_dimensions() == (3, 2)
    assert image.get_width() == 3
    assert image.get_height() == 2
    assert image.get_pixel(2, 1) == (0.0, 0.0, 0.0, 0.0)


def test_normalized_pixels_are_stored_as_8bit() -> None:
    image = PillowImageData.new(1, 1)

    image.set_pixel(0, 0, 1.0, 0.5, 0.0)

    assert image.image.getpixel((0, 0)) == (255, 128, 0, 255)
    assert image.get_pixel(0, 0) == (1.0, 128 / 255, 0.0, 1.0)


def test_set_pixel_accepts_a_container_and_clamps() -> None:
    image = PillowImageData.new(1, 1)

    image.set_pixel(0, 0, (1.5, -0.25, 0.2, 0.2))

    assert image.image.getpixel((0, 0)) == (255, 0, 51, 51)


def test_out_of_range_positions_raise() -> None:
    image = PillowImageData.new(2, 2)

    with pytest.raises(IndexError):
        image.get_pixel(2, 0)
    with pytest.raises(IndexError):
        image.set_pixel(0, -1, 0.0, 0.0, 0.0)
    with pytest.raises(IndexError):
        image.map_pixel(lambda x, y, r, g, b, a: (r, g, b, a), 1, 1, 2, 2)


def test_rgb_images_are_converted_to_rgba() -> None:
    image = PillowImageData(Image.new("RGB", (1, 1), (10, 20, 30)))

    assert image.image.mode == "RGBA"
    assert image.image.getpixel((0, 0)) == (10, 20, 30, 255)


def test_file_round_trip(tmp_path) -> None:
    source = tmp_path / "source.png"
    Image.new("RGBA", (2, 1), (200, 100, 50, 25)).save(source)

    image = PillowImageData.from_file(source)
    image.set_pixel(1, 0, 0.0, 0.0, 1.0, 1.0)
    written = image.save(tmp_path / "out.png")

    with Image.open(written) as reloaded:
        assert reloaded.getpixel((0, 0)) == (200, 100, 50, 25)
        assert reloaded.getpixel((1, 0)) == (0, 0, 255, 255)


def test_raw_functions_work_on_pillow_images() -> None:
    api = install(HostApi(image_data=PillowImageData))
    image = PillowImageData(Image.new("RGBA", (2, 2), (10, 20, 30, 40)))

    image.set_raw_pixel(0, 0, (255, 128, 0, 64))
    image.map_raw_pixel(lambda x, y, r, g, b, a: (r, g, b, 255), 0, 1, 2, 1)

    assert image.image.getpixel((0, 0)) == (255, 128, 0, 64)
    assert image.get_raw_pixel(1, 0) == (10, 20, 30, 40)
    assert api.get_raw_pixel(image, 1, 1) == (10, 20, 30, 255)


def test_identity_map_keeps_every_pixel() -> None:
    install(HostApi(image_data=PillowImageData))
    source = Image.new("RGBA", (16, 16))
    pixels = source.load()
    for i in range(256):
        pixels[i % 16, i // 16] = (i, 255 - i, (i * 7) % 256, (i * 3) % 256)
    image = PillowImageData(source.copy())

    image.map_raw_pixel(lambda x, y, r, g, b, a: (r, g, b, a))

    positions = [(x, y) for y in range(16) for x in range(16)]
    assert [image.image.getpixel(p) for p in positions] == [source.getpixel(p) for p in positions]
