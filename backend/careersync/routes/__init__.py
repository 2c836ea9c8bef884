# Infrastructure routes (unversioned). Application routes live in v1/.
from . import health as health, prometheus as prometheus
