# main.py
import uvicorn

from seasonchain.api.server import create_app
from seasonchain.config.simulator_config import SimulatorConfig
from seasonchain.monitoring.logging_config import LogConfig
from seasonchain.node import SeasonNode

def main():
    config = SimulatorConfig()
    LogConfig(
        log_dir=config.get("monitoring.log_dir", "logs"),
        level=config.get("monitoring.log_level", "INFO")
    ).setup_logging()

    # Initialize core components
    node = SeasonNode.from_config(config)
    app = create_app(node)

    print(f"Season node started. Total blocks: {node.schedule.total_blocks}, R0: {node.schedule.r0:.6f}")
    uvicorn.run(app, host=config.get("api.host"), port=config.get("api.port"))

if __name__ == "__main__":
    main()
