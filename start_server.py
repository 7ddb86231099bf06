#!/usr/bin/env python3
"""
Startup script for the Contract Template Generator API.
This script handles environment checks and server startup.
"""

import os
import shutil
import subprocess
import sys
import logging
import signal
import time
from pathlib import Path
from typing import Optional

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class ServerManager:
    """Manages the startup and shutdown of the contract API server."""

    def __init__(self):
        self.server_process: Optional[subprocess.Popen] = None
        self.project_root = Path(__file__).parent

    def check_environment(self) -> bool:
        """Report configuration the server will run with."""
        logger.info("Checking environment configuration...")

        env_file = self.project_root / ".env"
        if not env_file.exists():
            logger.info(".env file not found, using defaults and environment variables")

        from config.settings import settings

        logger.info(f"Contract prefix fallback: {settings.contract_prefix}")
        logger.info(f"Contract format fallback: {settings.contract_format}")

        if settings.export_pdf and not shutil.which(settings.soffice_binary):
            logger.warning(f"LibreOffice '{settings.soffice_binary}' not found; PDF export will fail")

        return True

    def check_dependencies(self) -> bool:
        """Check if all required dependencies are installed."""
        logger.info("Checking dependencies...")

        required_modules = {
            'fastapi': 'fastapi',
            'uvicorn': 'uvicorn',
            'docx': 'python-docx',
            'yaml': 'PyYAML',
            'num2words': 'num2words',
            'pydantic_settings': 'pydantic-settings',
        }

        missing_packages = []
        for module, package in required_modules.items():
            try:
                __import__(module)
            except ImportError:
                missing_packages.append(package)

        if missing_packages:
            logger.error(f"Missing packages: {', '.join(missing_packages)}")
            logger.error("Install them with: pip install -e .")
            return False

        logger.info("All dependencies are available")
        return True

    def start_server(self, host: str = "0.0.0.0", port: int = 8000,
                     reload: bool = False, workers: int = 1):
        """Start the FastAPI server."""
        logger.info(f"Starting server on {host}:{port}")

        cmd = [
            sys.executable, "-m", "uvicorn",
            "contractgen.api.main:app",
            "--host", host,
            "--port", str(port),
            "--workers", str(workers)
        ]

        if reload:
            cmd.append("--reload")

        try:
            self.server_process = subprocess.Popen(
                cmd,
                cwd=self.project_root,
                env=os.environ.copy()
            )

            logger.info(f"Server started with PID {self.server_process.pid}")
            logger.info(f"API documentation available at: http://localhost:{port}/docs")

            # Wait for server to start
            time.sleep(2)

            return self.server_process

        except OSError as e:
            logger.error(f"Failed to start server: {str(e)}")
            return None

    def stop_server(self):
        """Stop the server gracefully."""
        if self.server_process:
            logger.info("Stopping server...")
            self.server_process.terminate()

            try:
                self.server_process.wait(timeout=10)
            except subprocess.TimeoutExpired:
                logger.warning("Server didn't stop gracefully, killing process...")
                self.server_process.kill()
                self.server_process.wait()

            logger.info("Server stopped")

    def setup_signal_handlers(self):
        """Setup signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down...")
            self.stop_server()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)


def main():
    """Main function to start the server."""
    import argparse

    parser = argparse.ArgumentParser(description="Start the Contract Template Generator API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--workers", type=int, default=1, help="Number of worker processes")
    parser.add_argument("--skip-checks", action="store_true", help="Skip environment checks")

    args = parser.parse_args()

    server_manager = ServerManager()

    if not args.skip_checks:
        logger.info("=== Contract Template Generator Startup ===")

        if not server_manager.check_dependencies():
            logger.error("Dependency check failed. Exiting.")
            sys.exit(1)

        server_manager.check_environment()

    server_manager.setup_signal_handlers()

    server_process = server_manager.start_server(
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers
    )

    if server_process:
        try:
            server_process.wait()
        except KeyboardInterrupt:
            pass
        finally:
            server_manager.stop_server()
    else:
        logger.error("Failed to start server")
        sys.exit(1)


if __name__ == "__main__":
    main()
