#!/usr/bin/env python3
#
###################################################################
# Project: TraficSecure
# File: traficsecure_app/__init__.py
# Purpose: Package init
#
# Author: TraficSecure Team
# Created: 2026-10-19
#
# Version: 0.4.0
# Last Modified: 2026-10-19 by TraficSecure Team
###################################################################
#
__all__ = ['config', 'database', 'enums', 'logging_config', 'main', 'models', 'schemas']
