# sneaker_tryon/main.py
import argparse
import asyncio
import cv2
import logging
import time
import yaml
import numpy as np
from collections import deque
from pydantic import ValidationError

from tryon_engine.common.config import load_config, configure_logging
from tryon_engine.processing.pose_estimator import MediaPipePoseEstimator
from tryon_engine.session.tryon_session import TryOnSession
from tryon_engine.visualization.visualizer import Visualizer, save_capture

logger = logging.getLogger(__name__)


async def run(config) -> None:
    """
    The try-on application loop.
    Enters the session, feeds camera frames through it and always exits cleanly.
    """
    fps_history = deque(maxlen=100)
    estimator = MediaPipePoseEstimator(config.pose)
    session = TryOnSession(config, estimator)
    visualizer = Visualizer(config.visualization)

    try:
        if not await session.enter():
            logger.error(session.status.message)
            return

        last_time = time.perf_counter()
        async for result in session.results(session.context.stream.frames()):
            now = time.perf_counter()
            latency = now - last_time
            last_time = now
            fps_history.append(1.0 / latency if latency > 0 else 0)
            avg_fps = np.mean(fps_history)

            output_frame = visualizer.render(
                session.context.last_frame,
                result.status,
                session.context.object_layer,
                session.overlay.surface,
                avg_fps,
                result.processing_time_ms,
            )
            cv2.imshow('Sneaker Try-On', output_frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                logger.info("Shutdown signal received.")
                break
            if key == ord('c'):
                image = session.capture()
                if image is not None:
                    save_capture(image, config.capture.output_dir)
    finally:
        session.exit()
        estimator.close()


def main():
    parser = argparse.ArgumentParser(description="Real-time sneaker try-on anchored to a tracked foot.")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML configuration file")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (IOError, yaml.YAMLError, ValidationError) as e:
        print(f"ERROR: Failed to initialize. {e}")
        return

    configure_logging(config.logging)
    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        cv2.destroyAllWindows()
        logger.info("Application terminated.")


if __name__ == "__main__":
    main()
