# tests/test_link_budget.py
import math
import numpy as np
import pytest
from phy.errors import InvalidInputError
from phy.link_budget import (LinkBudgetInputs, estimate_link_budget, total_loss_db, tx_power_per_layer_dbm,
                             rx_power_per_layer_dbm, thermal_noise_power_w, snr_linear)

def test_total_loss_is_plain_db_sum():
    assert total_loss_db(100.0, 10.0, 5.0) == 115.0
    assert total_loss_db(80.5, 20.0, 1.5) == 102.0

def test_tx_power_split_across_layers():
    assert tx_power_per_layer_dbm(30, 1) == 30
    assert np.isclose(tx_power_per_layer_dbm(30, 2), 27, atol=0.1)
    assert np.isclose(tx_power_per_layer_dbm(30, 4), 24, atol=0.1)
    with pytest.raises(InvalidInputError):
        tx_power_per_layer_dbm(30, 0)

def test_rx_power_and_thermal_noise():
    assert rx_power_per_layer_dbm(30, 10, 5) == 25
    assert rx_power_per_layer_dbm(50, 20, 10) == 40
    assert np.isclose(thermal_noise_power_w(300, 1e9), 1.38e-23 * 300 * 1e9, rtol=0, atol=1e-20)
    for T, B in ((0, 1e6), (300, 0), (-1, 1e6)):
        with pytest.raises(InvalidInputError):
            thermal_noise_power_w(T, B)

def test_snr_linear_from_dbm():
    # 30 dBm = 1 W over 1 nW of noise
    assert np.isclose(snr_linear(30, 1e-9), 1e9, rtol=1e-12)

def test_estimate_link_budget_chain():
    inp = LinkBudgetInputs(path_loss_db=100.0, tx_power_dbm=30.0, bandwidth_hz=100e6,
                           layers=2, shadowing_db=4.0, o2i_loss_db=6.0, beamforming_gain_db=3.0)
    lb = estimate_link_budget(inp)
    assert lb.total_loss_db == 110.0
    assert np.isclose(lb.tx_power_per_layer_dbm, 30.0 - 10 * math.log10(2))
    assert np.isclose(lb.rx_power_per_layer_dbm, lb.tx_power_per_layer_dbm - 110.0 + 3.0)
    expected = 1e-3 * 10 ** (lb.rx_power_per_layer_dbm / 10) / (1.38e-23 * 300.0 * 100e6)
    assert np.isclose(lb.snr_linear, expected)
    assert np.isclose(lb.snr_db, 10 * math.log10(expected))
