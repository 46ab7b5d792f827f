from dataclasses import dataclass
from typing import Sequence

import streamlit as st


@dataclass(frozen=True)
class SelectOption:
    value: str
    label: str


@dataclass(frozen=True)
class SelectState:
    values: list[str]
    labels: dict[str, str]
    index: int | None


def select_state(options: Sequence[SelectOption], selected: str | None) -> SelectState:
    """
    Compute what a select box shows from its options and the value held by the parent. A selected value that is not
    among the options selects nothing.

    Parameters
    ----------
    options : Sequence[SelectOption]
        The options, in display order
    selected : str | None
        The currently selected value

    Returns
    -------
    SelectState
        The option values, their labels and the index of the selected one
    """
    values = [option.value for option in options]
    labels = {option.value: option.label for option in options}
    index = values.index(selected) if selected in values else None
    return SelectState(values=values, labels=labels, index=index)


def render_select(label: str, options: Sequence[SelectOption], selected: str | None, key: str,
                  placeholder: str = "Choose an option") -> str | None:
    """
    Render a select box for the given state and return the value the user picked. The caller owns the selected
    value and passes it back in on the next rerun.
    """
    state = select_state(options, selected)
    return st.selectbox(
        label,
        state.values,
        index=state.index,
        format_func=lambda value: state.labels[value],
        placeholder=placeholder,
        key=key,
    )
