import json

import pandas as pd
import pytest

from bank_queue.examples.bank_study import run_bank_study
from bank_queue.scripts.run_simulation import convert_numpy_types, main


def test_main_prints_every_scenario(capsys):
    assert main(['--horizon', '120', '--seed', '3', '-d']) == 0

    out = capsys.readouterr().out
    assert 'c=2:' in out
    assert 'c=3:' in out
    assert 'Comparison: c=2 vs c=3' in out
    assert 'Teller 1' in out


def test_main_writes_json_and_csv(tmp_path):
    output = tmp_path / 'results.json'
    customers = tmp_path / 'customers.csv'

    code = main(['-q', '-c', '1', '2', '--horizon', '120', '-o', str(output),
                 '--customers-csv', str(customers)])

    assert code == 0
    data = json.loads(output.read_text())
    assert set(data['scenarios']) == {'c=1', 'c=2'}
    assert data['config']['servers'] == [1, 2]
    assert 'c=1 vs c=2' in data['comparisons']
    assert data['analytical']['c=2']['num_servers'] == 2

    table = pd.read_csv(customers)
    assert set(table['scenario']) == {'c=1', 'c=2'}
    assert len(table) == 2 * data['scenarios']['c=1']['total_customers']


def test_main_replications(tmp_path, capsys):
    output = tmp_path / 'results.json'

    assert main(['-r', '3', '-c', '2', '--horizon', '60', '-o', str(output)]) == 0

    assert 'Replications: c=2' in capsys.readouterr().out
    data = json.loads(output.read_text())
    assert data['replications'][0]['replications'] == 3


def test_main_uses_config_file(tmp_path):
    config = tmp_path / 'bank.json'
    config.write_text(json.dumps({'hourly_rate': 30, 'servers': [4], 'horizon': 60}))
    output = tmp_path / 'results.json'

    assert main(['-q', '--config', str(config), '-o', str(output)]) == 0

    data = json.loads(output.read_text())
    assert data['config']['hourly_rate'] == 30
    assert list(data['scenarios']) == ['c=4']


def test_command_line_overrides_config_file(tmp_path):
    config = tmp_path / 'bank.json'
    config.write_text(json.dumps({'servers': [4], 'horizon': 60}))
    output = tmp_path / 'results.json'

    assert main(['-q', '--config', str(config), '-c', '1', '-o', str(output)]) == 0
    assert list(json.loads(output.read_text())['scenarios']) == ['c=1']


def test_main_saves_plot(tmp_path):
    plot = tmp_path / 'report.png'
    assert main(['-q', '--horizon', '60', '--plot-file', str(plot)]) == 0
    assert plot.exists()


@pytest.mark.parametrize('argv', [
    ['-c', '0'],
    ['--arrival-rate', '-5'],
    ['--config', 'does-not-exist.json'],
    ['--arrival-rate', 'nan'],
    ['--service-time', 'inf'],
    ['--horizon', 'inf'],
])
def test_main_reports_errors(argv, capsys):
    assert main(argv + ['-q']) == 1
    assert 'Error:' in capsys.readouterr().err


def test_bad_arguments_exit_with_usage():
    with pytest.raises(SystemExit) as excinfo:
        main(['--selection', 'random'])
    assert excinfo.value.code == 2


def test_convert_numpy_types():
    import numpy as np

    data = convert_numpy_types({'a': np.int64(2), 'b': [np.float64(1.5)], 'c': np.arange(2)})
    assert data == {'a': 2, 'b': [1.5], 'c': [0, 1]}
    assert type(data['a']) is int


def test_bank_study_writes_tables(tmp_path):
    study = run_bank_study(seed=5, output_dir=str(tmp_path), verbose=False)

    assert set(study['results']) == {'c=2', 'c=3'}
    assert 'Improvement (%)' in study['comparison'].columns
    assert (tmp_path / 'summary.csv').exists()
    assert (tmp_path / 'comparison.csv').exists()
    assert (tmp_path / 'report.png').exists()


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_json_output_is_strict(tmp_path):
    output = tmp_path / 'results.json'

    # Utilization has no better direction, so its improvement is nan
    assert main(['-q', '--horizon', '60', '-o', str(output)]) == 0

    data = json.loads(output.read_text(), parse_constant=_reject_constant)
    utilization = [row for row in data['comparisons']['c=2 vs c=3']
                   if row['Metric'] == 'Utilization'][0]
    assert utilization['Improvement (%)'] is None


def test_json_output_for_an_unstable_empty_day(tmp_path):
    output = tmp_path / 'results.json'

    # Tiny horizon: most likely nobody arrives, and one teller is overloaded
    assert main(['-q', '-c', '1', '--arrival-rate', '120', '--service-time', '5',
                 '--horizon', '0.001', '-o', str(output)]) == 0

    data = json.loads(output.read_text(), parse_constant=_reject_constant)
    assert data['analytical']['c=1']['Wq'] is None


def test_convert_numpy_types_drops_non_finite_values():
    import numpy as np

    data = convert_numpy_types({'a': float('nan'), 'b': [np.float64('inf'), 1.5]})
    assert data == {'a': None, 'b': [None, 1.5]}


@pytest.mark.parametrize('flag, name', [
    ('-o', 'results.json'),
    ('--customers-csv', 'customers.csv'),
    ('--plot-file', 'report.png'),
])
def test_unwritable_output_path(tmp_path, capsys, flag, name):
    target = tmp_path / 'missing' / name

    assert main(['-q', '--horizon', '60', flag, str(target)]) == 1
    assert 'Error:' in capsys.readouterr().err


@pytest.mark.parametrize('content', [
    {'hourly_rate': '45'},
    {'servers': 2},
    {'seed': 'abc'},
    {'replications': 2.5},
])
def test_badly_typed_config_file(tmp_path, capsys, content):
    config = tmp_path / 'bank.json'
    config.write_text(json.dumps(content))

    assert main(['-q', '--config', str(config)]) == 1
    assert 'Error:' in capsys.readouterr().err
