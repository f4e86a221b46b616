"""
Management command to create or reset an admin-panel account.

Usage:
    python manage.py create_site_admin <username> <email> [--role editor]

The password is read from --password or prompted for.
"""
from getpass import getpass

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import User


class Command(BaseCommand):
    help = 'Creates (or resets the password of) an admin-panel account'

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('email')
        parser.add_argument('--password', help='Password; prompted for when omitted')
        parser.add_argument(
            '--role',
            choices=User.Role.values,
            default=User.Role.ADMIN,
            help='Account role (default: admin)'
        )

    def handle(self, *args, **options):
        username = options['username']
        email = options['email']
        role = options['role']
        password = options['password'] or getpass('Password: ')
        if not password:
            raise CommandError('A password is required.')

        with transaction.atomic():
            user = User.objects.filter(username=username).first()
            if user is not None:
                user.email = email
                user.role = role
                user.set_password(password)
                user.save()
                self.stdout.write(
                    self.style.WARNING(f'User {username} already exists; updated.')
                )
            else:
                user = User.objects.create_user(
                    username=username,
                    email=email,
                    password=password,
                    role=role,
                )
                self.stdout.write(self.style.SUCCESS(f'✓ Created user: {username}'))

        self.stdout.write(f'Role:  {user.get_role_display()}')
        self.stdout.write(f'Email: {user.email}')
