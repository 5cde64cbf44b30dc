"""
Protector Demo Application

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

This demo shows the basic flow of a Protector rule set:
- Declaring rules with grants, revocations, conditions and scopes
- Evaluating them for different subjects
- Checking proposed values before create and update
- Paranoid mode and evaluation metrics
"""

import logging
import sys

from protector.core.config import Config, configure, set_config
from protector.dsl import Meta, can, cannot, scope, between
from protector.metrics import get_global_collector


def build_meta() -> Meta:
    """Rule set of a blog post"""
    meta = Meta(lambda: ['title', 'body', 'rating', 'author'], model='Post')

    meta << (lambda: can('read'))

    @meta.add_rule
    def guests(user):
        if user is None:
            cannot('read', 'body')
            scope(lambda: 'published posts')

    @meta.add_rule
    def authors(user, post):
        if user is not None and user == post['author']:
            can('update', 'title', 'body', rating=between(1, 5))
            can('destroy')

    @meta.add_rule
    def editors(user):
        if user == 'editor':
            can('create', 'title', 'body', author=lambda value: value != 'editor')

    return meta


def show(label: str, value) -> None:
    print(f"  - {label}: {value}")


def main() -> int:
    """Main demo function"""
    print("Protector Demo Application")
    print("=" * 50)
    print()

    meta = build_meta()
    post = {'title': 'Hello', 'body': '...', 'rating': 3, 'author': 'alice'}

    for subject in (None, 'alice', 'editor'):
        box = meta.evaluate(subject, post)
        print(f"✓ Evaluated {len(meta.rules)} rules for subject {subject!r}")
        show("access", box.to_dict()['access'])
        show("relation", box.relation)
        show("scoped", box.scoped)
        show("updatable rating=4", box.updatable({'rating': 4}))
        show("updatable rating=9", box.updatable({'rating': 9}))
        show("first uncreatable field", box.first_uncreatable_field({'title': 'x', 'author': 'editor'}))
        print()

    configure(paranoid=True, metrics_enabled=True)
    box = meta.evaluate('alice', post)
    print("✓ Paranoid mode enabled")
    show("scoped without scope rule", box.scoped)
    print()

    print("✓ Metrics")
    print(get_global_collector().export().decode('utf-8'))

    set_config(Config())
    return 0


def run() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run()
