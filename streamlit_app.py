#!/usr/bin/env python3
"""
Monty Hall Lab - Streamlit Application
Play one game, then watch the simulated win rates converge.
"""

import time

import plotly.graph_objects as go
import streamlit as st

from monty_hall_lab import MonteCarloSimulator, MontyHallGame, SimulationConfig, series_to_frame
from monty_hall_lab.config import DEFAULT_BATCH_SIZES
from monty_hall_lab.game import GameState
from monty_hall_lab.metrics import THEORETICAL_STAY_RATE, THEORETICAL_SWITCH_RATE
from monty_hall_lab.trial import DOORS, DoorContent

st.set_page_config(page_title="Monty Hall Lab", page_icon="🚪", layout="centered")

STATUS = {
    GameState.INITIAL: "Pick a door!",
    GameState.DOOR_PICKED: "Would you like to stick with your choice or switch?",
}


def convergence_chart(frame) -> go.Figure:
    """Line chart of both strategies against the theoretical rates"""
    fig = go.Figure()
    x = frame["batch_size"].astype(str)
    fig.add_trace(go.Scatter(x=x, y=frame["switch_win_rate"], name="Switch Strategy", line_color="#82ca9d"))
    fig.add_trace(go.Scatter(x=x, y=frame["stay_win_rate"], name="Stay Strategy", line_color="#8884d8"))
    fig.add_hline(y=THEORETICAL_SWITCH_RATE, line_dash="dash", line_color="#82ca9d",
                  annotation_text=f"Theoretical Switch ({THEORETICAL_SWITCH_RATE:.2f}%)")
    fig.add_hline(y=THEORETICAL_STAY_RATE, line_dash="dash", line_color="#8884d8",
                  annotation_text=f"Theoretical Stay ({THEORETICAL_STAY_RATE:.2f}%)")
    fig.update_layout(xaxis_title="Number of Games", yaxis_title="Win Rate (%)", yaxis_range=[0, 100])
    return fig


if "game" not in st.session_state:
    st.session_state.game = MontyHallGame()
    st.session_state.results = None

game: MontyHallGame = st.session_state.game

st.title("🚪 Monty Hall Game")
if game.state is GameState.FINAL:
    st.write(f"You {'won' if game.won else 'lost'}! The car was behind door {game.prize_door + 1}")
else:
    st.write(STATUS[game.state])

for door, col in zip(DOORS, st.columns(len(DOORS))):
    with col:
        content = game.door_content(door)
        if content is None:
            label = "🚪"
        else:
            label = "🏆 Car!" if content is DoorContent.PRIZE else "🐐 Goat"
        chosen = door == game.current_choice
        st.markdown(f"### {label}" + (" ⭐" if chosen else ""))
        if game.state is GameState.INITIAL and st.button(f"Door {door + 1}", key=f"door-{door}"):
            game.pick(door)
            st.rerun()

if game.state is GameState.DOOR_PICKED:
    stick, switch = st.columns(2)
    if stick.button("Stick"):
        game.decide(False)
        st.rerun()
    if switch.button("Switch"):
        game.decide(True)
        st.rerun()

if game.state is GameState.FINAL:
    seed = st.number_input("Seed (0 for random)", min_value=0, value=0, step=1)
    run, again = st.columns(2)
    if again.button("Play Again"):
        game.reset()
        st.session_state.results = None
        st.rerun()
    if run.button("Run Simulation"):
        config = SimulationConfig(
            batch_sizes=DEFAULT_BATCH_SIZES,
            base_seed=int(seed) or None,
            show_progress=False,
            delay_seconds=0.8,
        )
        simulator = MonteCarloSimulator(config)
        message = st.empty()
        summaries = []
        for batch_size in config.batch_sizes:
            message.info(f"Running simulation for {batch_size:,} games...")
            time.sleep(config.delay_seconds)
            summaries.append(simulator.run_batch(batch_size))
        message.success("All simulations complete!")
        st.session_state.results = series_to_frame(summaries)

if st.session_state.results is not None:
    frame = st.session_state.results
    st.subheader("Simulation Results")
    st.plotly_chart(convergence_chart(frame), use_container_width=True)
    st.dataframe(frame, hide_index=True)
    st.caption(
        f"Theoretical probabilities: Stay ({THEORETICAL_STAY_RATE:.2f}%), "
        f"Switch ({THEORETICAL_SWITCH_RATE:.2f}%)"
    )
