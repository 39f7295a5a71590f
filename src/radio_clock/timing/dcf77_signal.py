#!/usr/bin/env python3
"""
DCF77 Signal Generator - Amplitude Envelope Simulation

================================================================================
PURPOSE
================================================================================
Turn encoded DCF77 frames into sampled signals, for exercising receivers and
pulse classifiers without an antenna.

================================================================================
AMPLITUDE MODULATION
================================================================================
The 77.5 kHz carrier is reduced to about 15% of full amplitude at the start
of every second:

    ┌─────────────┬──────────┬─────────────────────────────────┐
    │ Symbol      │ Duration │ Description                     │
    ├─────────────┼──────────┼─────────────────────────────────┤
    │ Binary 0    │ 100 ms   │ carrier at LOW_AMPLITUDE        │
    │ Binary 1    │ 200 ms   │ carrier at LOW_AMPLITUDE        │
    │ Minute mark │ 0 ms     │ second 59, no reduction at all  │
    └─────────────┴──────────┴─────────────────────────────────┘

The missing reduction in second 59 is what a receiver uses to find the
start of the next minute.

================================================================================
USAGE
================================================================================
    generator = DCF77SignalGenerator(sample_rate=1000)

    # 60 s envelope, one value per sample
    envelope = generator.encode_minute(dt)

    # Full waveform on a carrier (sample_rate must exceed 2 × carrier_hz)
    generator = DCF77SignalGenerator(sample_rate=200000, carrier_hz=CARRIER_HZ)
    waveform = generator.encode_minute(dt, envelope_only=False)
"""

import logging
from datetime import datetime
from typing import List, Optional

import numpy as np

from .dcf77_constants import (
    FRAME_BITS,
    LOW_AMPLITUDE,
    ONE_PULSE_S,
    ZERO_PULSE_S,
)
from .dcf77_encoder import DCF77Encoder
from .dcf77_frame import Frame

logger = logging.getLogger(__name__)

MINUTE_MARK_SECOND = 59


class DCF77SignalGenerator:
    """Generate DCF77 amplitude envelopes and modulated waveforms"""

    def __init__(
        self,
        sample_rate: int = 1000,
        carrier_hz: Optional[float] = None,
        low_amplitude: float = LOW_AMPLITUDE
    ):
        """
        Initialize signal generator

        Args:
            sample_rate: Sample rate in Hz
            carrier_hz: Carrier frequency for modulated output (None: envelope only)
            low_amplitude: Carrier level during a reduction, relative to 1.0
        """
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        if not 0.0 <= low_amplitude < 1.0:
            raise ValueError(f"low_amplitude must be in [0, 1), got {low_amplitude}")
        if carrier_hz and carrier_hz >= sample_rate / 2:
            raise ValueError(
                f"carrier_hz {carrier_hz} is above Nyquist for {sample_rate} Hz sampling"
            )

        self.sample_rate = sample_rate
        self.samples_per_second = sample_rate
        self.carrier_hz = carrier_hz or None
        self.low_amplitude = low_amplitude
        self.encoder = DCF77Encoder()

        logger.debug(
            f"DCF77 signal generator initialized: {sample_rate} Hz, "
            f"carrier={self.carrier_hz}, low={low_amplitude}"
        )

    def pulse_widths(self, frame: Frame) -> List[float]:
        """Reduction length in seconds for each second of the minute"""
        widths = []
        for second in range(FRAME_BITS):
            if second == MINUTE_MARK_SECOND:
                widths.append(0.0)
            elif frame[second]:
                widths.append(ONE_PULSE_S)
            else:
                widths.append(ZERO_PULSE_S)
        return widths

    def frame_to_envelope(self, frame: Frame) -> np.ndarray:
        """
        Convert a frame to its 60-second amplitude envelope.

        Returns:
            float32 array of 60 × sample_rate samples, 1.0 at full carrier
        """
        envelope = np.ones(FRAME_BITS * self.samples_per_second, dtype=np.float32)

        for second, width in enumerate(self.pulse_widths(frame)):
            if width == 0.0:
                continue
            start_idx = second * self.samples_per_second
            low_length = int(round(width * self.samples_per_second))
            envelope[start_idx:start_idx + low_length] = self.low_amplitude

        return envelope

    def encode_minute(self, dt: datetime, envelope_only: bool = True) -> np.ndarray:
        """
        Generate the 60-second signal announcing the minute dt.

        Args:
            dt: Timezone-aware datetime
            envelope_only: If True, return just the envelope. If False,
                           modulate it onto the carrier.
        """
        frame = self.encoder.encode(dt)
        envelope = self.frame_to_envelope(frame)

        if envelope_only:
            return envelope

        return self._apply_carrier_modulation(envelope)

    def _apply_carrier_modulation(self, envelope: np.ndarray) -> np.ndarray:
        """Multiply the envelope with a sine carrier at carrier_hz"""
        if self.carrier_hz is None:
            raise ValueError("carrier_hz must be set for modulated output")

        t = np.arange(len(envelope)) / self.sample_rate
        carrier = np.sin(2 * np.pi * self.carrier_hz * t)
        return (envelope * carrier).astype(np.float32)
