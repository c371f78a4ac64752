"""
Management command to place a drink into a tier by comparison.

Asks "which is better?" until the drink's rank is known, then saves it.

Usage:
    python manage.py rank_drink --email me@example.com --drink <drink uuid>
    python manage.py rank_drink --email me@example.com --drink <drink uuid> --tier mid

Answers:
    1  the new drink is better
    2  the drink already ranked is better
    q  cancel without saving
"""

from uuid import UUID

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.models import User
from apps.rankings.models import QualityTier
from apps.rankings.services import (
    start_placement,
    confirm_placement,
    RankingsServiceError,
)


class Command(BaseCommand):
    help = 'Rank a drink by comparing it with drinks already in its tier'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True, help='Owner of the drink')
        parser.add_argument('--drink', required=True, type=UUID, help='UUID of the drink to rank')
        parser.add_argument(
            '--tier',
            choices=QualityTier.values,
            help="Tier to place into (defaults to the drink's tier, then good)",
        )

    def handle(self, *args, **options):
        try:
            user = User.objects.get(email=options['email'].lower())
        except User.DoesNotExist:
            raise CommandError(f"No user with email {options['email']}")

        try:
            session = start_placement(user=user, drink_id=options['drink'], tier=options['tier'])
        except RankingsServiceError as e:
            raise CommandError(str(e))

        self.stdout.write(
            f"\nPlacing into the {session.tier} tier ({session.total} drinks, "
            f"about {session.estimated_comparisons} comparisons)\n"
        )

        while not session.is_complete:
            other = session.comparison
            self.stdout.write(
                f"\n  [1] the new drink\n"
                f"  [2] #{other.tier_rank} {other.drink.drink_type} @ {other.drink.cafe.name} ({other.score})\n"
            )
            answer = input('Which is better? [1/2/q] ').strip().lower()

            if answer == 'q':
                session.cancel()
                self.stdout.write(self.style.WARNING('Cancelled. Nothing was saved.'))
                return
            if answer not in ('1', '2'):
                self.stdout.write('Please answer 1, 2 or q.')
                continue

            session.record_choice(answer == '1')

        answer = input(f"\nSave as #{session.final_rank} in {session.tier}? [y/N] ").strip().lower()
        if answer != 'y':
            session.cancel()
            self.stdout.write(self.style.WARNING('Cancelled. Nothing was saved.'))
            return

        try:
            ranking = confirm_placement(user=user, session=session)
        except RankingsServiceError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(
                f'Ranked #{ranking.tier_rank} in {ranking.quality_tier} with score {ranking.score}'
            )
        )
