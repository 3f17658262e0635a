"""
Django management command to seed contest tokens.

Usage:
    python manage.py seed_tokens                  # Read tokens.txt next to manage.py
    python manage.py seed_tokens path/to/file.txt # Read a specific file
    python manage.py seed_tokens --generate 500   # Create 500 random codes
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from tokens.services import (
    TOKEN_LENGTH,
    generate_token_codes,
    read_token_codes,
    seed_tokens,
)


class Command(BaseCommand):
    help = 'Create contest tokens from a file (one code per line) or generate random ones'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            nargs='?',
            default=None,
            help='Token file, defaults to tokens.txt in the project root',
        )
        parser.add_argument(
            '--generate',
            type=int,
            default=None,
            metavar='N',
            help='Generate N random token codes instead of reading a file',
        )
        parser.add_argument(
            '--length',
            type=int,
            default=TOKEN_LENGTH,
            help='Length of generated codes',
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.NOTICE('Start seeding tokens...'))

        if options['generate'] is not None:
            if options['generate'] < 1:
                raise CommandError('--generate must be a positive number')
            codes = generate_token_codes(options['generate'], options['length'])
            self.stdout.write(f'Generated {len(codes)} token codes')
        else:
            path = options['path'] or settings.BASE_DIR / 'tokens.txt'
            try:
                codes = read_token_codes(path)
            except OSError as e:
                raise CommandError(f'Could not read token file at {path}: {e}')
            self.stdout.write(f'Read {len(codes)} token codes from {path}')

        if not codes:
            self.stdout.write(self.style.WARNING('No token codes to add.'))
            return

        result = seed_tokens(codes)

        if options['generate'] is not None:
            for code in codes:
                self.stdout.write(code)

        self.stdout.write(f'Skipped {result.skipped} tokens already in the database.')
        self.stdout.write(self.style.SUCCESS(f'Successfully created {result.created} tokens.'))
        if result.failed:
            self.stdout.write(self.style.WARNING(f'Failed to create {result.failed} tokens (check logs above).'))
        self.stdout.write(self.style.SUCCESS('Seeding finished.'))
