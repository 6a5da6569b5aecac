from django.core.management.base import BaseCommand, CommandError
from web3 import Web3

from apps.contract.chain import ChainError, get_contract_client


class Command(BaseCommand):
    help = "Show whether an address is an active dispute resolver on the escrow contract."

    def add_arguments(self, parser):
        parser.add_argument("address")

    def handle(self, *args, **options):
        address = options["address"]
        if not Web3.is_address(address):
            raise CommandError(f"Not a valid address: {address}")

        client = get_contract_client()
        try:
            is_resolver = client.is_dispute_resolver(address)
            owner = client.owner()
        except ChainError as exc:
            raise CommandError(str(exc))

        self.stdout.write(f"Contract owner: {owner}")
        if is_resolver:
            self.stdout.write(self.style.SUCCESS(f"{address} is an active dispute resolver"))
        else:
            self.stdout.write(self.style.WARNING(
                f"{address} is NOT a dispute resolver. "
                "Set OWNER_PRIVATE_KEY and run assign_dispute_resolver."
            ))
