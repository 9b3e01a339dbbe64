#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

# variable names recognized in the deployment .env file, in the order they are written
KEY_ENV_VERSION = "VERSION"
KEY_ENV_MYSQL_ROOT_PASSWORD = "MYSQL_ROOT_PASSWORD"
KEY_ENV_SITES = "SITES"
KEY_ENV_LETSENCRYPT_EMAIL = "LETSENCRYPT_EMAIL"

# passed to the one-shot site initialization command
KEY_ENV_SITE_NAME = "SITE_NAME"
KEY_ENV_INSTALL_APPS = "INSTALL_APPS"
