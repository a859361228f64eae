# Copyright 2016 Uri Laserson
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import re
from collections import namedtuple

from seqsplit.region import parse_region
from seqsplit.utils import ConfigurationError, is_stdin


logger = logging.getLogger(__name__)

MODES = ("size", "part", "id", "region")

SplitConfig = namedtuple(
    "SplitConfig", ["mode", "size", "parts", "region", "md5", "two_pass"]
)


def select_mode(
    input="-",
    by_size=None,
    by_part=None,
    by_id=False,
    by_region=None,
    md5=False,
    two_pass=False,
    line_width=0,
    id_regexp=None,
):
    """Validate split settings and return a SplitConfig

    Exactly one of `by_size`, `by_part`, `by_id` and `by_region` must be
    given.  Nothing here touches the input records, so every
    ConfigurationError is raised before a single record is read.
    """
    if by_size is not None and by_size <= 0:
        raise ConfigurationError(
            f"value of --by-size should be greater than 0: {by_size}"
        )
    if by_part is not None and by_part <= 0:
        raise ConfigurationError(
            f"value of --by-part should be greater than 0: {by_part}"
        )
    if line_width is not None and line_width < 0:
        raise ConfigurationError(
            f"value of --line-width should not be negative: {line_width}"
        )
    if id_regexp is not None:
        try:
            groups = re.compile(id_regexp).groups
        except re.error as e:
            raise ConfigurationError(f"invalid id regexp {id_regexp!r}: {e}")
        if groups < 1:
            raise ConfigurationError(
                f"id regexp must contain a capture group: {id_regexp}"
            )

    selected = [
        mode
        for (mode, value) in zip(
            MODES, (by_size, by_part, by_id or None, by_region or None)
        )
        if value is not None
    ]
    if not selected:
        raise ConfigurationError(
            "one of --by-size/--by-part/--by-id/--by-region should be given"
        )
    if len(selected) > 1:
        raise ConfigurationError(
            "only one of --by-size/--by-part/--by-id/--by-region may be given, "
            "got: {}".format(", ".join(selected))
        )
    mode = selected[0]

    if md5 and mode != "region":
        raise ConfigurationError("--md5 can only be used with --by-region")

    region = parse_region(by_region) if mode == "region" else None

    if two_pass:
        if mode != "part":
            logger.warning("no need for two-pass, ignored")
            two_pass = False
        elif is_stdin(input):
            raise ConfigurationError(
                "two-pass mode will fail when reading from stdin, "
                "please disable --two-pass"
            )

    return SplitConfig(
        mode=mode,
        size=by_size,
        parts=by_part,
        region=region,
        md5=md5,
        two_pass=two_pass,
    )
