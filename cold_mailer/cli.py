"""
Cold Mailer CLI - Command line interface for the cold outreach email service.

Usage:
    python -m cold_mailer.cli [command] [options]

Commands:
    serve       Run the HTTP service
    generate    Draft an email for a job URL or a job data file
    match       Show which portfolio links a skill list selects
    portfolio   List the loaded portfolio entries
    config      Manage configuration

Examples:
    python -m cold_mailer.cli serve --port 3000
    python -m cold_mailer.cli generate --url "https://jobs.example.com/123" --email me@example.com
    python -m cold_mailer.cli generate --job-file job.json --email me@example.com
    python -m cold_mailer.cli match --skills "React, Node.js, Photography"
"""

import argparse
import json
import logging
import sys

from cold_mailer.core import (
    ColdMailerError,
    JobRecordNormalizer,
    PortfolioIndex,
    SkillLinkMatcher,
)
from cold_mailer.generators import EmailRequestOrchestrator
from cold_mailer.utils import Config


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Cold Mailer - Job-aware cold email drafting with portfolio links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", "-p", type=int, help="Port to listen on")
    serve_parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Draft an email")
    source = gen_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", "-u", help="Job posting URL")
    source.add_argument("--job-file", "-j", help="Job data file (JSON)")
    gen_parser.add_argument("--email", "-e", required=True, help="Your email address")
    gen_parser.add_argument("--output", "-o", help="Write the full result to a JSON file")

    # Match command
    match_parser = subparsers.add_parser("match", help="Match skills to portfolio links")
    match_parser.add_argument("--skills", "-s", required=True, help="Comma-separated skills")
    match_parser.add_argument("--role", "-r", default="", help="Job role (used when no skills are given)")

    # Portfolio command
    portfolio_parser = subparsers.add_parser("portfolio", help="List portfolio entries")
    portfolio_parser.add_argument("--path", help="Portfolio JSON file (default: configured dataset)")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--set-api-key", nargs=2, metavar=("PROVIDER", "KEY"), help="Set API key")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config(args.config)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.get("logging.level", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            cmd_serve(args, config)
        elif args.command == "generate":
            cmd_generate(args, config)
        elif args.command == "match":
            cmd_match(args, config)
        elif args.command == "portfolio":
            cmd_portfolio(args, config)
        elif args.command == "config":
            cmd_config(args, config)
        else:
            parser.print_help()

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except ColdMailerError as e:
        print(f"\nError: {e.message}")
        if e.detail:
            print(f"   {e.detail}")
        sys.exit(1)


def cmd_serve(args, config: Config):
    """Execute serve command."""
    from cold_mailer.web import create_app

    app = create_app(config)
    app.run(
        host=args.host or config.get("server.host", "0.0.0.0"),
        port=args.port or config.get("server.port", 3000),
        debug=args.debug or config.get("server.debug", False),
        threaded=True,
    )


def cmd_generate(args, config: Config):
    """Execute generate command."""
    orchestrator = EmailRequestOrchestrator.from_config(config)

    if args.url:
        print(f"🔍 Loading {args.url}...")
        result = orchestrator.generate_from_url(args.url, args.email)
    else:
        with open(args.job_file, 'r') as f:
            job_data = json.load(f)
        result = orchestrator.generate_from_data(job_data, args.email)

    job = result.job_record
    print(f"\n📋 {job.role or 'Unspecified role'}")
    if job.experience:
        print(f"   Experience: {job.experience}")
    print(f"   Skills: {', '.join(job.skills)}")
    print(f"   Portfolio links: {', '.join(result.portfolio_links) or '(none)'}")

    print("\n" + "=" * 60 + "\n")
    print(result.email)
    print("\n" + "=" * 60)

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        print(f"\n💾 Saved result to: {args.output}")


def cmd_match(args, config: Config):
    """Execute match command."""
    index = PortfolioIndex.load(config.get_portfolio_path())
    normalizer = JobRecordNormalizer(fallback_skills=config.get("matching.fallback_skills"))
    matcher = SkillLinkMatcher(
        default_links=config.get("portfolio.default_links"),
        max_links=config.get("matching.max_links", 2),
    )

    job = normalizer.normalize({"role": args.role, "skills": args.skills})
    links = matcher.match(job.skills, index)

    print(f"\nSkills: {', '.join(job.skills)}")
    print(f"\n✅ Selected {len(links)} link(s):")
    for link in links:
        print(f"   - {link}")


def cmd_portfolio(args, config: Config):
    """Execute portfolio command."""
    index = PortfolioIndex.load(args.path or config.get_portfolio_path())

    if not len(index):
        print("No portfolio entries loaded.")
        return

    print(f"\n📋 {len(index)} portfolio entries\n")
    for entry in index:
        print(f"  {entry.skill_tag:<45} {entry.link}")


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"✅ Created config at: {config.config_path}")

    elif args.show:
        print("\n📋 Current Configuration\n")
        config.print_config()

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for complex values
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    elif args.set_api_key:
        provider, key = args.set_api_key
        config.set_api_key(provider, key)
        print(f"✅ Set API key for {provider}")

    else:
        print("Use --show, --set, --set-api-key, or --init")


if __name__ == "__main__":
    main()
