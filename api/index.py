"""Flask entry point for Vercel - POST /api/verify-captcha."""

from __future__ import annotations

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from captchagate import create_app

app = create_app()
