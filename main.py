#!/usr/bin/env python3
"""
EC Accumulator Demo: accumulate members, issue witnesses and verify them
"""

import argparse
import logging

from ec_accumulator.accumulator import Accumulator
from ec_accumulator.config import config
from ec_accumulator.encoding import encode_g1, encode_g2, encode_scalar, pairing_calldata, to_hex


def demo_accumulator(members, curve_type):
    print(f"=== Accumulator Demo ({curve_type}) ===")

    acc = Accumulator(curve_type=curve_type)
    curve = acc.curve

    # Add members
    scalars = [acc.add_member(member.encode("utf-8")) for member in members]
    value = acc.current_value()
    print(f"Current Accumulator: {to_hex(encode_g1(value, curve))}")
    print(f"g2: {to_hex(encode_g2(acc.g2, curve))}\n")

    # Witness and verify every member
    for member, x in zip(members, scalars):
        witness = acc.membership_witness(x)
        result = acc.verify_membership(x, witness)
        print(f"Member {member!r}")
        print(f"  scalar:  {to_hex(encode_scalar(x, curve))}")
        print(f"  witness: {to_hex(encode_g1(witness, curve))}")
        print(f"  verification: {'PASS' if result else 'FAIL'}")

    # Calldata for an on-chain check of the first member
    if scalars and curve_type == "bn254":
        witness = acc.membership_witness(scalars[0])
        calldata = pairing_calldata(scalars[0], witness, value, acc.g2, curve)
        print(f"\necPairing calldata for {members[0]!r}:\n{to_hex(calldata)}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pairing-based accumulator demo")
    parser.add_argument("members", nargs="*", default=["member1", "member2", "member3"],
                        help="members to accumulate")
    parser.add_argument("--curve", default=config.curve, choices=["bn254", "bls12_381"],
                        help="pairing-friendly curve")
    parser.add_argument("--log-level", default=config.log_level, help="logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    demo_accumulator(args.members, args.curve)


if __name__ == "__main__":
    main()
