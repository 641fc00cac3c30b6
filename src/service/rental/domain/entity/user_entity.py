from typing import Optional

import attrs


@attrs.define
class User:
    name: str
    email: str
    id: Optional[int] = None
