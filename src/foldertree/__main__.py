import sys

from foldertree.main import main

sys.exit(main())
