import sys

from narrator_console.app import main

sys.exit(main())
