"""
Command-line entrypoint for the pets dashboard.

- Parses CLI args and env config
- Builds the FastAPI app and serves it with uvicorn

Warns when the client secret is empty: the token request will then be rejected
and every page renders the authentication error.
"""
from __future__ import annotations
import sys

import uvicorn

from .config import parse_args
from .web import create_app

def main() -> None:
    args = parse_args()
    if not args.client_id:
        print("Missing client id: set PETFINDER_CLIENT_ID or pass --client-id", file=sys.stderr)
        sys.exit(2)
    if not args.client_secret:
        print("[warn] PETFINDER_CLIENT_SECRET is empty; authentication will fail", file=sys.stderr)
    print(f"""
        ====== Pets Dashboard ======
        Petfinder API  : {args.base_url}
        Listening on   : http://{args.host}:{args.port}
        Timeouts (s)   : connect={args.connect_timeout} read={args.read_timeout}
        ============================
    """)
    try:
        uvicorn.run(create_app(args), host=args.host, port=args.port)
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)

if __name__ == "__main__":
    main()
