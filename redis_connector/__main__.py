import sys

from redis_connector.cli import main

sys.exit(main())
