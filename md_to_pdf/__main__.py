import sys

from md_to_pdf.cli import main

sys.exit(main())
