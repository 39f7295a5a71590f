"""
Time code processing for radio-clock.

DCF77 frame model, decoder, encoder and signal generator.
"""

from .dcf77_frame import Frame
from .dcf77_decoder import DCF77Decoder
from .dcf77_encoder import DCF77Encoder
from .dcf77_signal import DCF77SignalGenerator

__all__ = ['Frame', 'DCF77Decoder', 'DCF77Encoder', 'DCF77SignalGenerator']
