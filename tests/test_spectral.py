# tests/test_spectral.py
import math
import numpy as np
import pytest
from phy.errors import InvalidInputError
from phy.spectral import (spectral_efficiency, shannon_capacity_bps, select_cqi, select_mcs,
                          modulation_and_code_rate, mcs_by_index, qam_descriptor)

def test_spectral_efficiency_shannon_bound():
    assert np.isclose(spectral_efficiency(1000), math.log2(1001), atol=1e-3)
    assert np.isclose(spectral_efficiency(1000), 9.968, atol=1e-3)
    assert spectral_efficiency(0.0) == 0.0
    assert shannon_capacity_bps(1e6, 1.0) == 1e6
    for bad in (-1e-3, float("nan"), float("inf")):
        with pytest.raises(InvalidInputError):
            spectral_efficiency(bad)

def test_cqi_floor_selection():
    assert select_cqi(0.0)[0].index == 0
    assert select_cqi(0.1)[0].index == 0            # below CQI 1
    assert select_cqi(0.1523)[0].index == 1         # exact entry
    assert select_cqi(100.0)[0].index == 15
    # just below CQI 4: floor keeps CQI 3 even though 4 is the nearest entry
    cqi, clamped = select_cqi(1.47)
    assert cqi.index == 3 and not clamped
    assert cqi.efficiency == 0.8770

def test_mcs_floor_selection_and_clamp():
    mcs, clamped = select_mcs(0.0)
    assert mcs.index == 0 and clamped
    mcs, clamped = select_mcs(2.0)
    assert (mcs.index, mcs.modulation_order, mcs.code_rate_x1024) == (7, 4, 490) and not clamped
    mcs, _ = select_mcs(7.4063)
    assert mcs.index == 27
    assert select_mcs(2.0) == select_mcs(2.0)

def test_modulation_and_code_rate_goes_through_cqi():
    # SE 5.0 -> CQI 10 (4.5234) -> MCS 17
    assert modulation_and_code_rate(5.0) == (6, 772)
    # SE 5.4 sits between MCS 20 (5.3320) and 21, but CQI 11 (5.1152) caps it at MCS 19
    assert modulation_and_code_rate(5.4) == (6, 873)

def test_mcs_by_index():
    assert mcs_by_index(20).code_rate_x1024 == 682.5
    assert mcs_by_index(0).modulation_order == 2
    for bad in (-1, 28):
        with pytest.raises(InvalidInputError):
            mcs_by_index(bad)

def test_qam_descriptor():
    assert qam_descriptor(4) == (2, 2.0)
    assert qam_descriptor(16) == (4, 10.0)
    assert qam_descriptor(64) == (6, 42.0)
    for bad in (2, 8, 32, 100):
        with pytest.raises(InvalidInputError):
            qam_descriptor(bad)
