from __future__ import annotations

from devstack_provisioner.main import main

if __name__ == "__main__":
    raise SystemExit(main())
