import pytest

from gamma_table import generate, generate_from_block
from table_config import Mode
from table_errors import (NonPositiveExponent, TableTooSmall, OutputCeilingOverflow,
                          UnsupportedTargetWidth, TableParamsError)


def test_scenario_encode_darkens():
    table = generate(2.2, 256, 255, mode=Mode.ENCODE)
    assert table[0] == 0
    assert table[255] == 255
    assert table[128] < 128


def test_scenario_decode_brightens():
    encoding = generate(2.2, 256, 255, mode=Mode.ENCODE)
    decoding = generate(2.2, 256, 255, mode=Mode.DECODE)
    assert decoding[128] > 128
    assert decoding[0] == encoding[0]
    assert decoding[255] == encoding[255]


def test_scenario_ceiling_overflow():
    with pytest.raises(OutputCeilingOverflow) as exc_info:
        generate(2.2, 10, 300, 8)
    assert exc_info.value.value == 300
    assert exc_info.value.limit == 255


def test_scenario_linear():
    assert generate(1.0, 10, 9).tolist() == list(range(10))


@pytest.mark.parametrize('size', [1, 2])
def test_too_small(size):
    with pytest.raises(TableTooSmall):
        generate(2.2, size)


@pytest.mark.parametrize('exponent', [0.0, -1.0])
def test_non_positive(exponent):
    with pytest.raises(NonPositiveExponent):
        generate(exponent, 10)


def test_interior_disagreement_for_non_unit_exponent():
    for exponent in (0.5, 1.5, 2.2):
        encoding = generate(exponent, 16, 255, mode='encode').tolist()
        decoding = generate(exponent, 16, 255, mode='decode').tolist()
        assert encoding[0] == decoding[0]
        assert encoding[-1] == decoding[-1]
        assert any(e != d for e, d in zip(encoding[1:-1], decoding[1:-1]))


def test_name_is_carried():
    assert generate(2.2, 16, name='LED_GAMMA').name == 'LED_GAMMA'


def test_generate_from_block():
    tables = generate_from_block("""
        gamma_table! {
            name: GAMMA_TABLE_22,
            entry_type: u8,
            gamma: 2.2,
            size: 256
        }
        gamma_table! {
            name: GAMMA_CORRECTED,
            entry_type: u16,
            gamma: 2.4,
            size: 1024,
            max_value: 1000,
            decoding: true
        }
    """)
    assert [t.name for t in tables] == ['GAMMA_TABLE_22', 'GAMMA_CORRECTED']
    assert tables[0].tolist() == generate(2.2, 256, 255).tolist()
    assert tables[1][1023] == 1000
    assert tables[1].config.mode is Mode.DECODE


def test_generate_from_block_reports_validation_errors():
    with pytest.raises(UnsupportedTargetWidth):
        generate_from_block("name: T, entry_type: i32, gamma: 2.2, size: 10")
    with pytest.raises(TableParamsError):
        generate_from_block("name: T, entry_type: u8, size: 10")
