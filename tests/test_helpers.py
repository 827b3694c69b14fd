# tests/test_helpers.py
import numpy as np
import pytest
from phy.errors import InvalidInputError
from phy.units import dbm_to_watts, watts_to_dbm, wavelength_m, frequency_from_wavelength_hz, SPEED_OF_LIGHT
from phy.numerology import (describe_frame, slot_duration_s, num_subcarriers, fft_size,
                            ofdm_symbol_duration_us, subcarrier_spacing_khz)
from phy.channel import coherence_time_s, coherence_bandwidth_hz, traffic_density

def test_dbm_watts_round_trip():
    assert np.isclose(dbm_to_watts(30), 1.0)
    assert np.isclose(watts_to_dbm(1.0), 30.0)
    for x in (1e-15, 3.3e-9, 0.2, 1.0, 40.0, 1e4):
        assert np.isclose(dbm_to_watts(watts_to_dbm(x)), x, rtol=1e-12)
    with pytest.raises(InvalidInputError):
        watts_to_dbm(0.0)

def test_wavelength_frequency():
    assert np.isclose(wavelength_m(300e6), SPEED_OF_LIGHT / 300e6)
    assert np.isclose(frequency_from_wavelength_hz(wavelength_m(3.5e9)), 3.5e9)
    with pytest.raises(InvalidInputError):
        wavelength_m(0)
    with pytest.raises(InvalidInputError):
        frequency_from_wavelength_hz(-1.0)

def test_numerology_frame():
    f = describe_frame(3)
    assert (f.scs_khz, f.slots_per_subframe, f.rb_bandwidth_khz) == (120, 8, 1440)
    assert f.slot_duration_ms == 0.125
    assert np.isclose(f.symbol_duration_us, 1e6 / 120e3)
    assert slot_duration_s(0) == 1e-3
    assert subcarrier_spacing_khz(1) == 30
    with pytest.raises(InvalidInputError):
        describe_frame(7)

def test_subcarriers_fft_symbol():
    assert num_subcarriers(100e6, 30) == 3333
    assert fft_size(2.0 ** -10, 2.0 ** 21) == 2048
    assert np.isclose(ofdm_symbol_duration_us(15e3), 66.6667, atol=1e-4)
    with pytest.raises(InvalidInputError):
        num_subcarriers(100e6, 0)
    with pytest.raises(InvalidInputError):
        fft_size(0, 30.72e6)

def test_coherence_and_traffic_density():
    assert np.isclose(coherence_time_s(0.1, 10.0), 0.005)
    assert np.isclose(coherence_bandwidth_hz(1e-6), 1e6)
    assert traffic_density(5.0, 10.0, 1e8) == 5e9
    with pytest.raises(InvalidInputError):
        coherence_time_s(0.1, 0.0)
    with pytest.raises(InvalidInputError):
        coherence_bandwidth_hz(0.0)
    with pytest.raises(InvalidInputError):
        traffic_density(-1.0, 1.0, 1.0)
