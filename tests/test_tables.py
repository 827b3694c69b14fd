# tests/test_tables.py
import numpy as np
import pytest
from phy.tables import CQI_TABLE, MCS_TABLE, TBS_TABLE, CQI_EFFICIENCY, MCS_EFFICIENCY, TBS_VALUES

def test_table_shapes_and_order():
    assert [e.index for e in CQI_TABLE] == list(range(16))
    assert [e.index for e in MCS_TABLE] == list(range(28))
    assert len(TBS_TABLE) == 93 and TBS_TABLE[0] == 24 and TBS_TABLE[-1] == 3824
    assert np.all(np.diff(CQI_EFFICIENCY) > 0)
    assert np.all(np.diff(MCS_EFFICIENCY) > 0)
    assert np.all(np.diff(TBS_VALUES) > 0)

def test_code_rates_are_fractions_of_1024():
    assert all(0 < e.code_rate_x1024 <= 1024 for e in MCS_TABLE)
    assert all(0 < e.code_rate_x1024 <= 1024 for e in CQI_TABLE[1:])

def test_efficiency_matches_qm_times_rate():
    for e in MCS_TABLE:
        assert np.isclose(e.modulation_order * e.code_rate_x1024 / 1024, e.max_efficiency, atol=1e-4)

def test_tables_are_read_only():
    with pytest.raises(ValueError):
        TBS_VALUES[0] = 0
    with pytest.raises(AttributeError):
        CQI_TABLE[1].efficiency = 1.0
