import sys

from codeowner_review.main import main

sys.exit(main())
