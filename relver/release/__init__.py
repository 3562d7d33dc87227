"""Release version resolution.

- semver: version parsing and precedence
- validator: npm / git / GitHub agreement for one channel
- calculator: next version per release type
- conflicts: the computed version must not exist yet
- resolver: entry point tying the above together
"""

from __future__ import annotations
