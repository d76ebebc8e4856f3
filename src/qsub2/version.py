# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

__version__ = "1.0.0"
