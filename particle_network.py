# particle_network.py
"""
Application wiring and frame loop for the particle network background.

main() orchestrates the whole lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Applies the saved (or default) theme.
4. Creates the simulation context and the Pygame window, wiring window
   events to the simulation's notifications.
5. Drives the frame loop until the window closes or max_steps is reached.
"""
import logging
from utils import setup_logging, load_config
from colors import read_theme_colors
import cProfile
import pstats
import io


def connect_theme(themes, sim, visualizer=None):
    """
    Subscribes the simulation (and the renderer, if given) to theme changes.

    On every change the theme's style is re-read: the simulation gets new
    network colors and the renderer a new background.

    Returns:
        The listener that was subscribed.
    """
    def on_theme_change(theme):
        style = themes.book.style_for(theme)
        sim.set_theme_colors(read_theme_colors(style))
        if visualizer is not None:
            visualizer.set_style(style)

    themes.subscribe(on_theme_change)
    return on_theme_change


def main(config_path: str = 'config.json'):
    """
    The main function to run the network background.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Particle Network Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})
    theme_params = config.get('themes', {})

    from simulation import create_simulation
    from themes import ThemeBook, ThemeController
    from visualization import Visualizer

    # --- Component Initialization ---
    themes = ThemeController(
        ThemeBook(theme_params),
        default_theme=theme_params.get('default_theme', 'dark'),
        state_file=theme_params.get('state_file')
    )

    # 1. The visualizer determines the drawable size.
    visualizer = Visualizer(
        fullscreen=vis_params.get('fullscreen', False),
        window_size=(vis_params.get('window_width', 1280), vis_params.get('window_height', 720)),
        pixel_ratio=vis_params.get('device_pixel_ratio', 1.0),
        fps=vis_params.get('fps', 60)
    )

    # 2. The simulation is sized from the actual window.
    sim = create_simulation(
        visualizer.width,
        visualizer.height,
        pixel_ratio=visualizer.pixel_ratio,
        seed=sim_params.get('seed')
    )

    # 3. Theme changes reach both the simulation and the renderer.
    connect_theme(themes, sim, visualizer)
    themes.start()

    # 4. Window events become simulation notifications.
    visualizer.on_resize = sim.resize
    visualizer.on_pointer_move = sim.pointer_moved
    visualizer.on_pointer_leave = sim.pointer_left
    visualizer.on_click = sim.trigger_ripple
    visualizer.on_toggle_theme = themes.toggle
    visualizer.on_cycle_accent = themes.cycle_accent

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_steps', 600)
    max_steps = run_params.get('max_steps')

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    while running:
        commands = sim.step()
        step_num += 1

        # The visualizer returns False once the user quits.
        if not visualizer.draw(commands):
            running = False

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            logging.info(f"Frame {step_num}, {len(sim.field)} particles, {visualizer.clock.get_fps():.1f} fps")
            logging.debug(f"Frame {step_num} | Draw commands: {len(commands)}")

        if max_steps is not None and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping.")
            running = False
    if profiler:
        profiler.disable()

    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Network Shutting Down ---")
