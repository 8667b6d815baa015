# src/seasonchain/cli/cli.py
import argparse
import json
import random
import sys
from typing import List, Optional

from ..config.simulator_config import SimulatorConfig
from ..emissions.audit import audit_emissions
from ..emissions.schedule import EmissionsSchedule
from ..exceptions import SeasonChainError
from ..monitoring.logging_config import LogConfig
from ..node import SeasonNode

class CLI:
    def __init__(self):
        self.config: Optional[SimulatorConfig] = None

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)

        if not hasattr(args, 'func'):
            parser.print_help()
            return 1

        try:
            self.config = SimulatorConfig(args.config)
            return args.func(args) or 0
        except SeasonChainError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='seasonchain CLI')
        parser.add_argument('--config', default='config/simulator.yaml', help='Simulator YAML config')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        preview = subparsers.add_parser('preview', help='Show the derived emission schedule')
        preview.set_defaults(func=self.preview)

        audit = subparsers.add_parser('audit', help='Replay a full season and check emission invariants')
        audit.set_defaults(func=self.audit)

        simulate = subparsers.add_parser('simulate', help='Produce blocks offline without waiting for ticks')
        simulate.add_argument('--blocks', type=int, default=100, help='Blocks to produce (0 runs to season end)')
        simulate.add_argument('--seed', type=int, default=None, help='Random seed')
        simulate.add_argument('--buy', action='append', default=[], metavar='TIER', help='Buy a rig for the demo user first')
        simulate.set_defaults(func=self.simulate)

        serve = subparsers.add_parser('serve', help='Run the HTTP/WebSocket API with live production')
        serve.add_argument('--host', default=None, help='Bind host')
        serve.add_argument('--port', type=int, default=None, help='Bind port')
        serve.set_defaults(func=self.serve)

        return parser

    def preview(self, args):
        schedule = EmissionsSchedule(self.config.emission_config())
        print(json.dumps(schedule.preview().to_dict(), indent=2))

    def audit(self, args):
        result = audit_emissions(self.config.emission_config())
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.passed else 1

    def simulate(self, args):
        node = SeasonNode.from_config(self.config, rng=random.Random(args.seed))
        producer = node.producer

        for tier_id in args.buy:
            reward = node.schedule.current_reward(node.chain_state.height)
            node.ledger.buy_rig("demo-user", tier_id, reward, node.clock.game_time())

        produced = 0
        while not producer.season_ended and (args.blocks == 0 or produced < args.blocks):
            if producer.produce_block() is not None:
                produced += 1

        telemetry = producer.telemetry()
        print(f"Produced {produced} blocks, height {telemetry.height}")
        print(f"Emitted {telemetry.emitted_total:.6f} / {telemetry.total_emission}")
        print(f"Season ended: {telemetry.season_ended}")
        for entry in node.ledger.leaderboard(5, node.clock.game_time()):
            print(f"  {entry['participant_id']}: earned {entry['total_earned']:.6f}")

    def serve(self, args):
        import uvicorn
        from ..api.server import create_app

        LogConfig(
            log_dir=self.config.get("monitoring.log_dir", "logs"),
            level=self.config.get("monitoring.log_level", "INFO")
        ).setup_logging()

        node = SeasonNode.from_config(self.config)
        host = args.host or self.config.get("api.host")
        port = args.port or self.config.get("api.port")
        print(f"Started season node at {host}:{port}")
        uvicorn.run(create_app(node), host=host, port=port)

def main():
    cli = CLI()
    sys.exit(cli.main(sys.argv[1:]))

if __name__ == "__main__":
    main()
