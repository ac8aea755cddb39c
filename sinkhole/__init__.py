#!/usr/bin/env python3
#
# sinkhole/__init__.py
# Copyright (C) 2025-2026 Gill-Bates http://github.com/Gill-Bates
#

"""Sinkhole – Management API for a network-wide DNS ad-blocking appliance."""

from .main import create_app

__all__ = ["create_app"]
