"""
Basic Protector usage example.

This example demonstrates the fundamental Protector operations:
- Declaring rules on a class
- Restricting instances to a subject
- Checking fields before update
- Predicates running in insecure mode
"""

from dataclasses import dataclass

from protector import Protected, can, cannot, scope, insecurely


@dataclass
class Account(Protected):
    owner: str = ''
    email: str = ''
    balance: int = 0


@Account.protect
def account_rules(user, account):
    if user == 'admin':
        can('read')
        can('update', 'email', balance=lambda value: value >= 0)
        return

    can('read', 'owner')
    if user == account.owner:
        can('read', 'email', 'balance')
        can('update', email=lambda value: '@' in value)
    scope(lambda: {'owner': user})


def basic_example():
    """Demonstrate basic Protector usage"""
    print("Basic Protector Example")
    print("=" * 30)

    account = Account(owner='alice', email='alice@example.com', balance=10)

    for user in ('alice', 'bob', 'admin'):
        box = account.restrict(user).protector_box()
        print(f"✓ {user}: readable email={box.readable('email')}, scoped={box.scoped}")
        print(f"  update email='nope' allowed: {box.updatable({'email': 'nope'})}")
        print(f"  first unupdatable field: {box.first_unupdatable_field({'email': 'a@b.c', 'balance': -1})}")

    with insecurely():
        print(f"✓ Restricted while insecure: {account.is_restricted()}")
    print(f"✓ Restricted afterwards: {account.is_restricted()}")

    account.unrestrict()
    print("✓ Unrestricted account")


if __name__ == "__main__":
    basic_example()
