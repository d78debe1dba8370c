from typing import Literal


existing_services = Literal[
    "certificates",
    "dns",
]
