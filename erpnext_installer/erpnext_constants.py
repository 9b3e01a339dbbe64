#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

from collections import defaultdict
from enum import Enum, auto


###################################################################################################
PLATFORM_LINUX = "Linux"
PLATFORM_LINUX_CENTOS = "centos"
PLATFORM_LINUX_DEBIAN = "debian"
PLATFORM_LINUX_FEDORA = "fedora"
PLATFORM_LINUX_UBUNTU = "ubuntu"


###################################################################################################
# Constants for run modes
class PresentationMode(Enum):
    MODE_TUI = auto()  # Text-based User Interface
    MODE_DUI = auto()  # Dialogs


###################################################################################################
# repositories cloned during deployment
FRAPPE_DOCKER_REPO_URL = "https://github.com/frappe/frappe_docker.git"
FRAPPE_DOCKER_DIR_NAME = "frappe_docker"
LETSENCRYPT_PROXY_REPO_URL = "https://github.com/evertramos/docker-compose-letsencrypt-nginx-proxy-companion.git"
LETSENCRYPT_PROXY_DIR_NAME = "docker-compose-letsencrypt-nginx-proxy-companion"
LETSENCRYPT_PROXY_SAMPLE_ENV = ".env.sample"
LETSENCRYPT_PROXY_START_SCRIPT = "./start.sh"

# template offered when no environment file exists yet
ENV_TEMPLATE_URL = "https://raw.githubusercontent.com/frappe/frappe_docker/develop/installation/env-example"
ENV_FILE_NAME = ".env"

# docker convenience script (see https://github.com/docker/docker-install)
DOCKER_CONVENIENCE_SCRIPT_URL = "https://get.docker.com/"

###################################################################################################
# URLS for figuring things out if something goes wrong
DOCKER_INSTALL_URLS = defaultdict(lambda: 'https://docs.docker.com/install/')
DOCKER_INSTALL_URLS[PLATFORM_LINUX_UBUNTU] = 'https://docs.docker.com/install/linux/docker-ce/ubuntu/'
DOCKER_INSTALL_URLS[PLATFORM_LINUX_DEBIAN] = 'https://docs.docker.com/install/linux/docker-ce/debian/'
DOCKER_INSTALL_URLS[PLATFORM_LINUX_CENTOS] = 'https://docs.docker.com/install/linux/docker-ce/centos/'
DOCKER_INSTALL_URLS[PLATFORM_LINUX_FEDORA] = 'https://docs.docker.com/install/linux/docker-ce/fedora/'
DOCKER_COMPOSE_INSTALL_URLS = defaultdict(lambda: 'https://docs.docker.com/compose/install/')
