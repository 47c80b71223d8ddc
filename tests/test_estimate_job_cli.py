"""Tests for the estimate_job command line script."""

import json

from scripts.estimate_job import main


def test_single_product(capsys):
    code = main(['--product', 'Business Card', '--quantity', '1000',
                 '--sheet', '35x50', '--price-per-sheet', '0.5'])
    output = json.loads(capsys.readouterr().out)
    assert code == 0
    assert output['total'] == '27.30'
    assert output['products'][0]['papers'][0]['layout']['items_per_sheet'] == 25


def test_order_file(tmp_path, capsys):
    order = {
        'products': [{
            'product_name': 'Business Card',
            'quantity': 1000,
            'papers': [{'pricing': {'price_per_sheet': 0.5},
                        'sheet': {'width': 35, 'height': 50}}],
            'finishing': ['UV Spot-Front']
        }],
        'additional_costs': [{'description': 'Rush', 'cost': 30}]
    }
    path = tmp_path / "order.json"
    path.write_text(json.dumps(order), encoding='utf-8')

    code = main(['--job', str(path)])
    output = json.loads(capsys.readouterr().out)
    assert code == 0
    assert output['base_cost'] == '400.00'


def test_incomplete_estimate_exit_code(capsys):
    code = main(['--product', 'Business Card', '--quantity', '1000', '--sheet', '35x50'])
    output = json.loads(capsys.readouterr().out)
    assert code == 1
    assert output['is_complete'] is False


def test_unknown_finishing_is_an_error():
    code = main(['--product', 'Flyer', '--quantity', '100', '--price-per-sheet', '1',
                 '--finishing', 'Glitter-Front'])
    assert code == 2


def test_press_options(capsys):
    code = main(['--press-options', '--item', '9x5.5', '--top', '3'])
    options = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(options) == 3
    assert options[0]['efficiency'] >= options[-1]['efficiency']
