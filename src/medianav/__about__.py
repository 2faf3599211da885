# SPDX-FileCopyrightText: 2025-present medianav contributors
#
# SPDX-License-Identifier: MIT
__version__ = "0.1.0"
