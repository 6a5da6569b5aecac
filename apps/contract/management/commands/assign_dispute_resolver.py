from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from web3 import Web3

from apps.contract.chain import ChainError, get_contract_client


class Command(BaseCommand):
    help = "Grant (or revoke with --revoke) dispute resolver rights, signed with OWNER_PRIVATE_KEY."

    def add_arguments(self, parser):
        parser.add_argument("address")
        parser.add_argument("--revoke", action="store_true")

    def handle(self, *args, **options):
        address = options["address"]
        grant = not options["revoke"]

        if not Web3.is_address(address):
            raise CommandError(f"Not a valid address: {address}")
        if not settings.OWNER_PRIVATE_KEY:
            raise CommandError("OWNER_PRIVATE_KEY is not set")

        client = get_contract_client()
        try:
            if client.is_dispute_resolver(address) == grant:
                state = "already" if grant else "not"
                self.stdout.write(f"{address} is {state} a dispute resolver, nothing to do")
                return

            tx_hash = client.assign_dispute_resolver(address, grant, settings.OWNER_PRIVATE_KEY)
        except ChainError as exc:
            raise CommandError(str(exc))

        action = "granted to" if grant else "revoked from"
        self.stdout.write(self.style.SUCCESS(f"Dispute resolver rights {action} {address} (tx {tx_hash})"))
