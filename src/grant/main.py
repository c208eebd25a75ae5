"""
Main entry point for grant login.

Logs in with the configured credentials, decodes the tenant claims from the
bearer token and prints the service base URLs it resolves to.
"""

import sys
from typing import List, Optional

from dotenv import load_dotenv

from .core import Config, setup_logger, timed, GrantError
from .api import IdentityAuthAPI
from .models import ServiceEndpoint, TokenBundle, JWTClaims
from .services import (
    KNOWN_SERVICE_PATTERNS,
    build_service_url,
    decode_claims,
    resolve_tenant,
)


class GrantLoginApp:
    """Login workflow wiring configuration, authentication and URL resolution."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)
        self.logger = setup_logger(log_file=self.config.log_file, log_level=self.config.log_level)
        self.logger.debug(f"Configuration: {self.config}")

        self.token_bundle: Optional[TokenBundle] = None
        self.claims: Optional[JWTClaims] = None

    def login(self) -> TokenBundle:
        """Authenticate against the identity provider."""
        self.config.validate()

        with IdentityAuthAPI(
            identity_url=self.config.identity_url,
            username=self.config.username,
            password=self.config.password,
            totp_secret=self.config.totp_secret,
            timeout=self.config.identity_timeout,
            verify_ssl=self.config.identity_verify_ssl,
            logger=self.logger
        ) as flow:
            with timed(self.logger, f"login as {self.config.username}"):
                self.token_bundle = flow.login()

        self.claims = decode_claims(self.token_bundle.token)
        return self.token_bundle

    def service_urls(self, endpoints: List[ServiceEndpoint]) -> List[str]:
        """Resolve base URLs for the given endpoint conventions."""
        if self.claims is None:
            raise RuntimeError("Not authenticated. Call login() first.")

        subdomain, platform_domain = resolve_tenant(self.claims, self.config.identity_url)
        return [
            build_service_url(subdomain, platform_domain, endpoint.name, endpoint.separator)
            for endpoint in endpoints
        ]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Log in to CyberArk Identity and resolve tenant service URLs"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--service",
        type=str,
        default=None,
        help="Service name (empty for the tenant root). Default: from config or 'sca'"
    )
    parser.add_argument(
        "--separator",
        type=str,
        default=None,
        help="Separator between tenant and service name. Default: from config or '.'"
    )
    parser.add_argument(
        "--all-patterns",
        action="store_true",
        help="Print base URLs for every known service naming pattern"
    )
    parser.add_argument(
        "--show-claims",
        action="store_true",
        help="Print the decoded tenant claims"
    )

    args = parser.parse_args(argv)

    load_dotenv()

    try:
        app = GrantLoginApp(config_file=args.config)
        bundle = app.login()

        if args.all_patterns:
            endpoints = KNOWN_SERVICE_PATTERNS
        else:
            name = args.service if args.service is not None else app.config.service_name
            separator = args.separator if args.separator is not None else app.config.service_separator
            endpoints = [ServiceEndpoint(name, separator)]

        urls = app.service_urls(endpoints)
    except (GrantError, ValueError, RuntimeError) as e:
        print(f"Login failed: {e}", file=sys.stderr)
        return 1

    print(f"Successfully authenticated as {app.claims.unique_name or app.config.username}")
    if bundle.token_lifetime:
        print(f"Token lifetime: {bundle.token_lifetime}s")
    if args.show_claims:
        print(f"Subdomain:       {app.claims.subdomain}")
        print(f"Platform domain: {app.claims.platform_domain}")

    for endpoint, url in zip(endpoints, urls):
        label = f" ({endpoint.description})" if endpoint.description else ""
        print(f"{url}{label}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
