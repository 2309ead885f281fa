#!/usr/bin/env python3
# attack_cli.py: run the RSA attacks from a terminal
#
#   rsattack factor  -e 17 -n 3233 -c 2790
#   rsattack brute   -e 17 -n 3233 -c 2790
#   rsattack compare -e 17 -n 3233 -c 2790 [--parallel] [--json]
#   rsattack menu                        # interactive loop

from __future__ import annotations
import argparse, json, logging, sys
from typing import Callable, List, Optional, TextIO

from rsattack.config import Settings
from rsattack.errors import InvalidInteger
from rsattack.harness import BRUTE_FORCE, FACTORING, AttackResult, compare, run_attack
from rsattack.logs import configure_logging
from rsattack.numeric import as_uint

logger = logging.getLogger("rsattack.cli")

RULE = "---------------------------------------------------"

BANNER = (f"{RULE}\n"
          "            RSA Attack Time Comparison             \n"
          f"{RULE}\n")

MENU = ("Choose an option below to continue:\n"
        "\t1) Attack 1: Brute Force M\n"
        "\t2) Attack 2: Factor N\n"
        "\t3) Quit\n\n"
        "Select Option: ")


def format_result(res: AttackResult) -> str:
    lines = ["", "--------------------Result-------------------------"]
    if not res.ok:
        lines.append(f"ERROR: {res.message}")
    else:
        lines.append(f"Decrypted message (M): {res.plaintext}")
        if res.factors is not None:
            lines += ["Primes:", f"\tp: {res.factors.p}", f"\tq: {res.factors.q}"]
        if res.exponent is not None:
            lines.append(f"Decryption exponent (d): {res.exponent}")
    lines.append(f"Time to run: {res.elapsed_ms:.3f}ms")
    return "\n".join(lines) + "\n"


# ---------- interactive menu ----------

def _ask_int(prompt: str, read: Callable[[], str], out: TextIO, name: str) -> int:
    out.write(prompt); out.flush()
    return as_uint(read(), name)


def read_inputs(read: Callable[[], str], out: TextIO):
    out.write("--------------------Input--------------------------\n")
    e = _ask_int("Enter the encryption exponent (e): ", read, out, "e")
    n = _ask_int("Enter the RSA modulus (N): ", read, out, "N")
    c = _ask_int("Enter the ciphertext (C): ", read, out, "C")
    return e, n, c


def menu(inp: Optional[TextIO] = None, out: Optional[TextIO] = None) -> int:
    """Banner + menu loop until the user picks 3 or input runs out."""
    inp = sys.stdin if inp is None else inp
    out = sys.stdout if out is None else out

    def read() -> str:
        line = inp.readline()
        if not line:
            raise EOFError
        return line.strip()

    out.write(BANNER + "\n")
    while True:
        out.write(MENU); out.flush()
        try:
            sel = read()
        except EOFError:
            out.write("\nGoodbye\n")
            return 0

        if sel == "3":
            out.write("Goodbye\n")
            return 0
        if sel not in ("1", "2"):
            out.write("\nERROR: Invalid option\n")
            continue

        try:
            e, n, c = read_inputs(read, out)
        except InvalidInteger as exc:
            out.write(f"\nERROR: {exc}\n")
            continue
        except EOFError:
            out.write("\nGoodbye\n")
            return 0

        res = run_attack(BRUTE_FORCE if sel == "1" else FACTORING, e, n, c)
        out.write(format_result(res) + "\n")


# ---------- scripted subcommands ----------

def _single(name: str, args) -> int:
    logger.debug("running %s on n=%s", name, args.n)
    res = run_attack(name, args.e, args.n, args.c)
    if args.json:
        print(json.dumps(res.to_dict(), indent=2))
    else:
        print(format_result(res))
    return 0 if res.ok else 1


def _compare(args) -> int:
    logger.debug("comparing attacks on n=%s parallel=%s", args.n, args.parallel)
    cmp = compare(args.e, args.n, args.c, parallel=args.parallel)
    if args.json:
        print(json.dumps(cmp.to_dict(), indent=2))
    else:
        print("Attack 1: Brute Force M" + format_result(cmp.brute_force))
        print("Attack 2: Factor N" + format_result(cmp.factoring))
        if cmp.speedup is not None:
            print(f"Agree: {'yes' if cmp.agree else 'NO'}   speedup (brute/factoring): {cmp.speedup:.1f}x")
    ok = cmp.brute_force.ok and cmp.factoring.ok and cmp.agree
    return 0 if ok else 1


def _uint(s: str) -> int:
    try:
        return as_uint(s)
    except InvalidInteger as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="rsattack",
                                 description="Recover an RSA plaintext by brute force or by factoring N.")
    ap.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    sub = ap.add_subparsers(dest="cmd", required=True)

    def key_args(p):
        p.add_argument("-e", type=_uint, required=True, help="encryption exponent")
        p.add_argument("-n", type=_uint, required=True, help="RSA modulus")
        p.add_argument("-c", type=_uint, required=True, help="ciphertext")
        p.add_argument("--json", action="store_true", help="print JSON instead of text")

    key_args(sub.add_parser("brute", help="Attack 1: brute force M"))
    key_args(sub.add_parser("factor", help="Attack 2: factor N and derive d"))
    p = sub.add_parser("compare", help="run both attacks on the same input")
    key_args(p)
    p.add_argument("--parallel", action="store_true", help="run the two attacks on worker threads")
    sub.add_parser("menu", help="interactive menu")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or Settings.from_env().log_level)

    if args.cmd == "menu":
        return menu()
    if args.cmd == "brute":
        return _single(BRUTE_FORCE, args)
    if args.cmd == "factor":
        return _single(FACTORING, args)
    return _compare(args)


if __name__ == "__main__":
    raise SystemExit(main())
