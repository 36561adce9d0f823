"""Queueing-theory reference calculations."""

from .analytical import AnalyticalResult, traffic_intensity, erlang_c, mmc

__all__ = [
    'AnalyticalResult',
    'traffic_intensity',
    'erlang_c',
    'mmc',
]
