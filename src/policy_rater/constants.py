# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Default engine configuration values."""

from typing import Final

DEFAULT_BASE_RATE: Final = 0.0
DEFAULT_DECIMAL_PLACES: Final = 2
DEFAULT_CONTINUE_ON_ERROR: Final = True
DEFAULT_GROUP_AGGREGATION_METHOD: Final = "sum"

# Token used for lookup keys of values that have no stable string form
UNKNOWN_LOOKUP_KEY: Final = "unknown"
