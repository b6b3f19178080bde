#!/usr/bin/env python3
"""
Dear PyGui control panel.

The panel is rendered one frame at a time from the simulator's own loop
(render_dearpygui_frame), so it shares the single simulation thread. Buttons
do not act directly: a click raises the matching input signal for exactly one
frame, and the controller's rising-edge triggers treat it like a key press.
Picking a scene from the combo selects it directly.
"""
import logging

import dearpygui.dearpygui as dpg

from .controller import InputSignals, SimulationController
from .data_models import SceneConfigurationError
from .physics import center_of_mass, kinetic_energy, total_momentum

logger = logging.getLogger(__name__)

SYNC_EVERY_FRAMES = 6  # ~10 Hz at 60 FPS


class ControlPanel:
    """
    Dear PyGui interface: scene picker, scene buttons, live statistics.
    """
    def __init__(self, sim: SimulationController):
        self.sim = sim
        self._pending = InputSignals()
        self._frames = 0

        self.scene_combo_id = None
        self.scene_text_id = None
        self.bodies_text_id = None
        self.time_text_id = None
        self.momentum_text_id = None
        self.energy_text_id = None
        self.com_text_id = None
        self.status_msg_id = None

        self._build_ui()

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Solar System - Controls', width=420, height=330)

        with dpg.window(label="Controls", tag="main_window"):
            dpg.add_text("Scene")
            self.scene_combo_id = dpg.add_combo(
                [kind.label for kind in self.sim.scenes],
                default_value=self.sim.scene_kind.label,
                width=260,
                callback=lambda s, a, u: self._on_select_scene(a),
            )
            with dpg.group(horizontal=True):
                dpg.add_button(label="< Prev", callback=lambda: self._pulse("previous_scene"))
                dpg.add_button(label="Restart", callback=lambda: self._pulse("restart"))
                dpg.add_button(label="Next >", callback=lambda: self._pulse("next_scene"))
                dpg.add_button(label="Toggle forces", callback=lambda: self._pulse("toggle_forces"))

            dpg.add_separator()

            dpg.add_text("Statistics")
            self.scene_text_id = dpg.add_text("")
            self.bodies_text_id = dpg.add_text("")
            self.time_text_id = dpg.add_text("")
            self.momentum_text_id = dpg.add_text("")
            self.energy_text_id = dpg.add_text("")
            self.com_text_id = dpg.add_text("")

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _pulse(self, signal: str):
        setattr(self._pending, signal, True)

    def _on_select_scene(self, label: str):
        labels = [kind.label for kind in self.sim.scenes]
        if label not in labels:
            self._set_error(f"Unknown scene '{label}'.")
            return
        try:
            scene = self.sim.select_scene(labels.index(label))
        except SceneConfigurationError as e:
            logger.warning(f"Could not build scene '{label}': {e}")
            self._set_error(str(e))
            return
        self._set_status(f"Loaded '{scene.name}'.")

    def _sync_ui_with_sim(self):
        sim = self.sim
        bodies = sim.bodies
        px, py = total_momentum(bodies)
        cx, cy = center_of_mass(bodies)
        dpg.set_value(self.scene_combo_id, sim.scene_kind.label)
        dpg.set_value(self.scene_text_id, f"Scene {sim.scene_index + 1}/{sim.scene_count}: {sim.scene.name}")
        dpg.set_value(self.bodies_text_id, f"Bodies: {len(bodies)}   Forces: {'on' if sim.show_forces else 'off'}")
        dpg.set_value(self.time_text_id, f"Sim time: {sim.sim_time:.2f} s   Frames: {sim.frame_count}")
        dpg.set_value(self.momentum_text_id, f"Momentum: ({px:.3e}, {py:.3e})")
        dpg.set_value(self.energy_text_id, f"Kinetic energy: {kinetic_energy(bodies):.3e}")
        dpg.set_value(self.com_text_id, f"Center of mass: ({cx:.1f}, {cy:.1f})")

    # -----------------------
    # Frame loop hooks
    # -----------------------

    def poll_input(self) -> InputSignals:
        """Render one panel frame and return the button pulses it produced."""
        if not dpg.is_dearpygui_running():
            return InputSignals(exit=True)
        if self._frames % SYNC_EVERY_FRAMES == 0:
            self._sync_ui_with_sim()
        self._frames += 1
        dpg.render_dearpygui_frame()
        signals, self._pending = self._pending, InputSignals()
        return signals

    def close(self):
        dpg.destroy_context()
