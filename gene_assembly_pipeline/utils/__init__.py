#!/usr/bin/env python3

"""
Utility components for the gene assembly pipeline.
"""

from .performance_monitor import PerformanceMonitor, PerformanceMetrics

__all__ = ['PerformanceMonitor', 'PerformanceMetrics']
