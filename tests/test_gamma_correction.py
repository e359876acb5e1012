import numpy as np
import pytest

from gamma_correction import GammaCorrection
from gamma_table import generate


@pytest.fixture
def rgb_image_8bit():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(8, 12, 3), dtype=np.uint8)


def test_uint8_image_uses_full_range_table(rgb_image_8bit):
    corrected = GammaCorrection().execute(rgb_image_8bit, gamma=2.2)
    expected = generate(2.2, 256, 255, 8, 'decode').values[rgb_image_8bit]
    assert corrected.dtype == np.uint8
    assert corrected.shape == rgb_image_8bit.shape
    np.testing.assert_array_equal(corrected, expected)


def test_decoding_brightens_and_encoding_darkens():
    image = np.full((2, 2, 3), 128, dtype=np.uint8)
    module = GammaCorrection()
    assert (module.execute(image, gamma=2.2) > 128).all()
    assert (module.execute(image, gamma=2.2, decoding=False) < 128).all()


def test_endpoints_are_preserved():
    image = np.array([[0, 255]], dtype=np.uint8)
    np.testing.assert_array_equal(GammaCorrection().execute(image), image)


def test_uint16_image():
    image = np.array([[0, 1000, 32768, 65535]], dtype=np.uint16)
    corrected = GammaCorrection().execute(image, gamma=2.2)
    table = generate(2.2, 65536, 65535, 16, 'decode')
    assert corrected.dtype == np.uint16
    np.testing.assert_array_equal(corrected, table.values[image])


def test_tables_are_cached():
    module = GammaCorrection()
    assert module.table_for(np.uint8, 2.2) is module.table_for(np.uint8, 2.2)
    assert module.table_for(np.uint8, 2.2) is not module.table_for(np.uint8, 2.2, decoding=False)


def test_custom_table():
    table = generate(2.2, 16, 255, 8, name='SMALL')
    image = np.arange(16, dtype=np.uint8).reshape(4, 4)
    corrected = GammaCorrection().execute(image, table=table)
    np.testing.assert_array_equal(corrected.ravel(), table.values)


def test_custom_table_too_small_for_image():
    table = generate(2.2, 16, 255, 8)
    image = np.array([[0, 16]], dtype=np.uint8)
    with pytest.raises(ValueError):
        GammaCorrection().execute(image, table=table)


def test_float_image_is_rejected():
    with pytest.raises(ValueError):
        GammaCorrection().execute(np.zeros((2, 2), dtype=np.float32))


def test_output_is_writeable(rgb_image_8bit):
    corrected = GammaCorrection().execute(rgb_image_8bit)
    corrected[0, 0, 0] = 1


@pytest.mark.parametrize('dtype', [np.uint32, np.uint64])
def test_wide_images_need_an_explicit_table(dtype):
    image = np.array([[0, 1]], dtype=dtype)
    with pytest.raises(ValueError, match="uint8/uint16"):
        GammaCorrection().execute(image, gamma=2.2)
    with pytest.raises(ValueError, match="uint8/uint16"):
        GammaCorrection().table_for(dtype)


@pytest.mark.parametrize('dtype', [np.uint32, np.uint64])
def test_wide_images_with_explicit_table(dtype):
    table = generate(2.2, 16, 2 ** 32 - 1, 32)
    image = np.array([[0, 7, 15]], dtype=dtype)
    corrected = GammaCorrection().execute(image, table=table)
    assert corrected.dtype == np.uint32
    np.testing.assert_array_equal(corrected, table.values[image])
