# SPDX-FileCopyrightText: 2025-present medianav contributors
#
# SPDX-License-Identifier: MIT

"""medianav - Local media browser core."""

from medianav.__about__ import __version__

__all__ = ["__version__"]
