"""Configuration, scenario runs and result tables for the bank study."""

from .config import SimulationConfig, config_from_dict, load_config
from .bank_system import (
    SCALAR_METRICS,
    scenario_label,
    generate_day,
    run_scenario,
    run_scenarios,
    run_replications,
    summarize_values,
)
from .tables import customer_table, summary_table, compare_scenarios, percent_change

__all__ = [
    'SimulationConfig',
    'config_from_dict',
    'load_config',
    'SCALAR_METRICS',
    'scenario_label',
    'generate_day',
    'run_scenario',
    'run_scenarios',
    'run_replications',
    'summarize_values',
    'customer_table',
    'summary_table',
    'compare_scenarios',
    'percent_change',
]
