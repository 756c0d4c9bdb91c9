import pytest

from phasm.errors import ImageTooLargeError, ImageTooSmallError, StegoError
from phasm.limits import validate_encode_dimensions


@pytest.mark.parametrize("width,height", [(800, 600), (3000, 4000)])
def test_valid_dimensions(width, height):
    assert validate_encode_dimensions(width, height) is None


def test_boundary_min():
    assert validate_encode_dimensions(200, 200) is None
    with pytest.raises(ImageTooSmallError):
        validate_encode_dimensions(199, 200)
    with pytest.raises(ImageTooSmallError):
        validate_encode_dimensions(200, 199)


def test_boundary_max_dimension():
    assert validate_encode_dimensions(8192, 1000) is None
    assert validate_encode_dimensions(1000, 8192) is None
    with pytest.raises(ImageTooLargeError):
        validate_encode_dimensions(8193, 1000)
    with pytest.raises(ImageTooLargeError):
        validate_encode_dimensions(1000, 8193)


def test_too_many_pixels():
    with pytest.raises(ImageTooLargeError):
        validate_encode_dimensions(5000, 3201)
    assert validate_encode_dimensions(4000, 4000) is None


def test_error_variants():
    with pytest.raises(ImageTooSmallError) as small:
        validate_encode_dimensions(100, 300)
    assert str(small.value) == "image too small for embedding"
    with pytest.raises(ImageTooLargeError) as large:
        validate_encode_dimensions(9000, 1000)
    assert str(large.value) == "image too large (max 8192px / 16MP)"
    assert isinstance(large.value, StegoError)


def test_small_checked_before_large():
    with pytest.raises(ImageTooSmallError):
        validate_encode_dimensions(100, 9000)