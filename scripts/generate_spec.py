#!/usr/bin/env python
"""Generate the petstore OpenAPI document and optionally update a snapshot hash.

Usage:
  python -m scripts.generate_spec --out openapi.json
  python -m scripts.generate_spec --out openapi.yaml --format yaml
  python -m scripts.generate_spec --update-hash
  python -m scripts.generate_spec --check

Options:
  --out PATH        Write the full document to PATH (directories auto-created)
  --format FMT      json (default) or yaml
  --snapshot PATH   Snapshot hash file (default tests/openapi_spec_hash.txt)
  --update-hash     Recompute and overwrite the snapshot hash file
  --check           Exit non-zero if current document hash != snapshot (CI check)

Safe Defaults:
  Without flags, prints current hash to stdout.

Exit Codes:
  0 success / in-check mode hash matches
  2 mismatch in --check mode
  3 other error (e.g. missing snapshot)
"""
from __future__ import annotations
import argparse, json, hashlib, pathlib, sys

import yaml

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
SNAPSHOT = ROOT / 'tests' / 'openapi_spec_hash.txt'

from flask_documented.openapi_builder import published_document  # noqa: E402
from flask_documented.petstore import create_app  # noqa: E402


def spec_hash(spec: dict) -> str:
    blob = json.dumps(spec, sort_keys=True, separators=(',', ':')).encode()
    return hashlib.sha256(blob).hexdigest()


def compute_spec_and_hash():
    spec = published_document(create_app())
    return spec, spec_hash(spec)


def main(argv: list[str]) -> int:
    p = argparse.ArgumentParser(description="Generate deterministic OpenAPI document")
    p.add_argument('--out', dest='out', help='Path to write the document')
    p.add_argument('--format', dest='fmt', choices=('json', 'yaml'), default='json')
    p.add_argument('--snapshot', dest='snapshot', default=str(SNAPSHOT), help='Snapshot hash file')
    p.add_argument('--update-hash', action='store_true', help='Overwrite snapshot hash file')
    p.add_argument('--check', action='store_true', help='Check current hash vs snapshot and exit 2 on mismatch')
    args = p.parse_args(argv)

    spec, h = compute_spec_and_hash()
    snapshot = pathlib.Path(args.snapshot)

    if args.out:
        out_path = pathlib.Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        if args.fmt == 'yaml':
            out_path.write_text(yaml.safe_dump(spec, sort_keys=False, allow_unicode=True))
        else:
            out_path.write_text(json.dumps(spec, indent=2, sort_keys=True) + '\n')
        print(f"Wrote {args.fmt} document to {out_path}")

    if args.check:
        if not snapshot.exists():
            print(f"Snapshot {snapshot} not found; run with --update-hash first", file=sys.stderr)
            return 3
        expected = snapshot.read_text().strip()
        if h != expected:
            print(f"Spec hash mismatch: expected={expected} current={h}", file=sys.stderr)
            return 2
        print(f"Spec hash OK: {h}")

    if args.update_hash:
        snapshot.parent.mkdir(parents=True, exist_ok=True)
        snapshot.write_text(h + '\n')
        print(f"Updated snapshot hash -> {h}")

    if not args.out and not args.update_hash and not args.check:
        print(h)

    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
