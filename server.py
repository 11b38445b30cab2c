"""Local development server for captchagate."""

from __future__ import annotations

import os

from captchagate import create_app


app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 9000))
    print(f"\nStarting captchagate on http://localhost:{port}")
    print("   Endpoints:")
    print("   - POST /verify-captcha")
    print("   - POST /api/verify-captcha")
    print()
    app.run(host="0.0.0.0", port=port, debug=True)
