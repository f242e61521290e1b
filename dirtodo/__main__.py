"""支持 python -m dirtodo 启动"""

import sys

from dirtodo.cli import main

sys.exit(main())
