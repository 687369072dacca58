"""
Whitelist root and proof generator.

Usage:
    whitelist-merkle root 0xabc... 0xdef... [--proofs] [--solidity] [--out whitelist.json]
    whitelist-merkle root --file whitelist.txt [--encoding padded]
    whitelist-merkle proof 0xabc... --file whitelist.txt
    whitelist-merkle verify 0xabc... --root 0x... --proof 0x... --proof 0x...

Environment Variables:
    WHITELIST_MERKLE_LOG_LEVEL   Log level (default: WARNING)
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from eth_utils import to_checksum_address

from whitelist_merkle import __version__
from whitelist_merkle.exceptions import InvalidInputError, WhitelistError
from whitelist_merkle.whitelist import (
    LeafEncoding,
    build_whitelist_tree,
    get_proof,
    normalize,
    verify_proof,
)

logger = logging.getLogger(__name__)

# --- CONFIGURATION ---

DEFAULT_ENCODING = LeafEncoding.PACKED
DEFAULT_OUTPUT = "whitelist_data.json"
LOG_LEVEL_ENV = "WHITELIST_MERKLE_LOG_LEVEL"

EXIT_SUCCESS = 0
EXIT_INPUT_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

# --- HELPERS ---


def setup_logging(level: Optional[str] = None) -> None:
    level = level or os.environ.get(LOG_LEVEL_ENV, "WARNING")
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def load_whitelist(path: Path) -> List[str]:
    """
    Read addresses from a JSON array or a text file with one address per line.

    Blank lines and ``#`` comments are skipped in text files.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise InvalidInputError(f"{path}: not valid UTF-8") from None
    if Path(path).suffix.lower() == ".json":
        data = json.loads(text)
        if not isinstance(data, list):
            raise WhitelistError(f"{path}: expected a JSON array of addresses")
        addrs = list(data)
    else:
        addrs = []
        for line in text.splitlines():
            line = line.split("#", 1)[0].strip()
            if line:
                addrs.append(line)
    logger.info("Loaded %d addresses from %s", len(addrs), path)
    return addrs


def _hex(b: bytes) -> str:
    return "0x" + b.hex()


def solidity_proof(addr: str, proof_hex: Sequence[str]) -> List[str]:
    name = to_checksum_address(addr).replace("0x", "").upper()
    lines = [f"PROOF_{name} = new bytes32[]({len(proof_hex)});"]
    for i, p in enumerate(proof_hex):
        lines.append(f"PROOF_{name}[{i}] = {p};")
    return lines


# --- GENERATION ---


def generate_whitelist_data(addresses: Sequence[str], encoding=DEFAULT_ENCODING) -> Dict[str, Any]:
    tree, addrs_sorted = build_whitelist_tree(addresses, encoding)
    entries = []
    for i, addr in enumerate(addrs_sorted):
        pf = tree.get_proof(i)
        entries.append({
            "address": to_checksum_address(addr),
            "leaf": _hex(tree.leaves[i]),
            "proof": [_hex(p) for p in pf],
            "valid": tree.verify_proof(tree.leaves[i], pf),
        })
    return {
        "merkleRoot": _hex(tree.root),
        "encoding": LeafEncoding(encoding).value,
        "count": len(addrs_sorted),
        "entries": entries,
    }


def print_results(data: Dict[str, Any], show_proofs: bool = False, solidity: bool = False) -> None:
    print(f"Merkle Root: {data['merkleRoot']}")
    if not (show_proofs or solidity):
        return
    for entry in data["entries"]:
        print(f"\nAddress {entry['address']} is whitelisted: {entry['valid']}")
        print("Proof:", "[" + ", ".join(entry["proof"]) + "]")
        if solidity:
            print("\n// Solidity")
            for line in solidity_proof(entry["address"], entry["proof"]):
                print(line)


def save_json(data: Dict[str, Any], filename: str = DEFAULT_OUTPUT) -> Path:
    path = Path(filename)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"\nData saved to: {path}")
    return path


# --- COMMANDS ---


def _addresses(args: argparse.Namespace) -> List[str]:
    addrs = list(args.addresses)
    if args.file:
        addrs.extend(load_whitelist(args.file))
    return addrs


def cmd_root(args: argparse.Namespace) -> int:
    data = generate_whitelist_data(_addresses(args), args.encoding)
    print_results(data, show_proofs=args.proofs, solidity=args.solidity)
    if args.out:
        save_json(data, args.out)
    return EXIT_SUCCESS


def cmd_proof(args: argparse.Namespace) -> int:
    pf = get_proof(args.target, _addresses(args), args.encoding)
    print(json.dumps([_hex(p) for p in pf], indent=2))
    return EXIT_SUCCESS


def cmd_verify(args: argparse.Namespace) -> int:
    ok = verify_proof(args.target, args.proof, args.root, args.encoding)
    print(f"Address {to_checksum_address(normalize(args.target))} is whitelisted: {ok}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whitelist-merkle",
        description="Compute whitelist Merkle roots and proofs for allowlisted minting.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Log level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )

    encoding = argparse.ArgumentParser(add_help=False)
    encoding.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING.value,
        choices=[e.value for e in LeafEncoding],
        help="Leaf pre-image: packed (abi.encodePacked) or padded (abi.encode)",
    )

    whitelist = argparse.ArgumentParser(add_help=False)
    whitelist.add_argument("--file", "-f", type=Path, default=None,
                           help="Whitelist file (.json array or one address per line)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    root_parser = subparsers.add_parser("root", parents=[encoding, whitelist],
                                        help="Print the whitelist Merkle root")
    root_parser.add_argument("addresses", nargs="*", help="Whitelisted addresses")
    root_parser.add_argument("--proofs", action="store_true", help="Also print every member's proof")
    root_parser.add_argument("--solidity", action="store_true", help="Print proofs as Solidity bytes32[] snippets")
    root_parser.add_argument("--out", "-o", default=None, help="Save root and proofs as JSON")
    root_parser.set_defaults(func=cmd_root)

    proof_parser = subparsers.add_parser("proof", parents=[encoding, whitelist],
                                         help="Print the proof for one address")
    proof_parser.add_argument("target", help="Address to prove")
    proof_parser.add_argument("addresses", nargs="*", help="Whitelisted addresses")
    proof_parser.set_defaults(func=cmd_proof)

    verify_parser = subparsers.add_parser("verify", parents=[encoding],
                                          help="Check a proof against a root")
    verify_parser.add_argument("target", help="Address to check")
    verify_parser.add_argument("--root", required=True, help="Merkle root (0x-prefixed)")
    verify_parser.add_argument("--proof", action="append", default=[],
                               help="Proof element (0x-prefixed); repeat in leaf-to-root order")
    verify_parser.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except (WhitelistError, OSError, json.JSONDecodeError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
