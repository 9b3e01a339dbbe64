#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Interactive installer for a single-host ERPNext deployment on frappe_docker."""

__version__ = "1.0.0"
