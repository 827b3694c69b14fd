# phy/link_budget.py
# DL link budget: total loss, per-layer Tx/Rx power, thermal noise, linear SNR
from __future__ import annotations
from dataclasses import dataclass
import logging
import math

from .errors import InvalidInputError
from .units import dbm_to_watts

log = logging.getLogger(__name__)

BOLTZMANN = 1.38e-23  # J/K


@dataclass(frozen=True)
class LinkBudgetInputs:
    path_loss_db: float
    tx_power_dbm: float
    bandwidth_hz: float
    layers: int = 1
    shadowing_db: float = 0.0
    o2i_loss_db: float = 0.0           # outdoor-to-indoor penetration loss
    beamforming_gain_db: float = 0.0   # per layer
    temperature_k: float = 300.0


@dataclass(frozen=True)
class LinkBudgetResult:
    total_loss_db: float
    tx_power_per_layer_dbm: float
    rx_power_per_layer_dbm: float
    thermal_noise_w: float
    snr_linear: float

    @property
    def snr_db(self) -> float:
        return 10.0 * math.log10(self.snr_linear) if self.snr_linear > 0 else -math.inf


def total_loss_db(path_loss_db: float, shadowing_db: float, o2i_loss_db: float) -> float:
    return path_loss_db + shadowing_db + o2i_loss_db


def tx_power_per_layer_dbm(tx_power_dbm: float, layers: int) -> float:
    if layers <= 0:
        raise InvalidInputError(f"layer count must be > 0, got {layers}")
    return tx_power_dbm - 10.0 * math.log10(layers)


def rx_power_per_layer_dbm(tx_per_layer_dbm: float, loss_db: float, beamforming_gain_db: float) -> float:
    return tx_per_layer_dbm - loss_db + beamforming_gain_db


def thermal_noise_power_w(temperature_k: float, bandwidth_hz: float) -> float:
    """N = k T B"""
    if temperature_k <= 0:
        raise InvalidInputError(f"temperature must be > 0 K, got {temperature_k}")
    if bandwidth_hz <= 0:
        raise InvalidInputError(f"bandwidth must be > 0 Hz, got {bandwidth_hz}")
    return BOLTZMANN * temperature_k * bandwidth_hz


def snr_linear(rx_power_dbm: float, noise_power_w: float) -> float:
    if noise_power_w <= 0:
        raise InvalidInputError(f"noise power must be > 0 W, got {noise_power_w}")
    return dbm_to_watts(rx_power_dbm) / noise_power_w


def estimate_link_budget(inp: LinkBudgetInputs) -> LinkBudgetResult:
    loss = total_loss_db(inp.path_loss_db, inp.shadowing_db, inp.o2i_loss_db)
    tx = tx_power_per_layer_dbm(inp.tx_power_dbm, inp.layers)
    rx = rx_power_per_layer_dbm(tx, loss, inp.beamforming_gain_db)
    noise = thermal_noise_power_w(inp.temperature_k, inp.bandwidth_hz)
    snr = snr_linear(rx, noise)
    log.debug("link budget: loss=%.2f dB tx/layer=%.2f dBm rx/layer=%.2f dBm noise=%.3e W snr=%.3e",
              loss, tx, rx, noise, snr)
    return LinkBudgetResult(
        total_loss_db=loss,
        tx_power_per_layer_dbm=tx,
        rx_power_per_layer_dbm=rx,
        thermal_noise_w=noise,
        snr_linear=snr,
    )
