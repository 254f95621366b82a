#!/usr/bin/env python3
"""Walk-through of an action guarded by contracts.

Usage:
    python scripts/create_person_example.py
    python scripts/create_person_example.py --policy raise --log-level info
"""

import sys
import argparse
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from actioncontracts import settings
from actioncontracts.contracts import ContractViolation, breaches_to_dict, contract, required
from actioncontracts.pipeline import Action


def invalid(context, breaches):
    context.fail(message=f"invalid_{breaches[0].property}", errors=breaches_to_dict(breaches))


@contract(
    expects=[required("name").filled(str), required("age").value(int)],
    assures=required("person").filled(),
    on_breach=invalid,
)
class CreatePerson(Action):
    def execute(self):
        self.context.person = {"name": self.context.name, "age": self.context.age}


class RenamePerson(Action):
    """No on_breach handler: the configured default policy applies."""

    def execute(self):
        self.context.person = None


def main():
    parser = argparse.ArgumentParser(description="Run example actions with contracts")
    parser.add_argument("--policy", choices=["fail", "raise", "warn"], help="Default consequence policy")
    parser.add_argument("--log-level", default="info", help="Package log level")
    args = parser.parse_args()

    user = {"log_level": args.log_level}
    if args.policy:
        user["default_policy"] = args.policy
    settings.configure(user)

    ok = CreatePerson.run(name="Billy", age=3)
    print(f"valid input:   success={ok.success} person={ok.person}")

    bad = CreatePerson.run(first_name="Billy", age="three")
    print(f"invalid input: success={bad.success} message={bad.message} errors={bad.errors}")

    contract(assures=required("person").filled())(RenamePerson)
    try:
        renamed = RenamePerson.run(name="Bob")
    except ContractViolation as exc:
        print(f"bad output:    raised {exc}")
    else:
        print(f"bad output:    success={renamed.success}")


if __name__ == "__main__":
    main()
