from organic_life.content.biomolecules import DNA, GLUCOSE, LIPID, get_monomer
from organic_life.services.game.synthesis import assemble_monomer, synthesize


def test_glucose_then_dna_scenario(store):
    result = synthesize(store, GLUCOSE)
    assert result.success
    s = store.state
    assert s.score == 50
    assert s.level == 2
    assert s.element_counts['C'] == 4
    assert s.element_counts['H'] == 3
    assert s.element_counts['O'] == 2
    assert s.energy == 95
    assert s.health == 100

    before = store.snapshot()
    result = synthesize(store, DNA)
    assert not result.success
    assert result.missing == {'C': 6, 'H': 9, 'O': 4, 'N': 1}
    assert set(result.missing) >= {'C', 'N'}
    assert store.snapshot() == before


def test_failed_synthesis_leaves_store_untouched(store):
    before = store.snapshot()
    result = synthesize(store, LIPID)
    assert not result.success
    assert result.missing['C'] == 45
    assert store.snapshot() == before
    assert store.animations == []


def test_synthesis_animation_uses_recipe_color(store):
    synthesize(store, GLUCOSE, position=(10, 20))
    [anim] = store.animations
    assert anim.payload == {'color': GLUCOSE.color, 'text': '+50'}
    assert anim.position == (10, 20)


def test_assemble_monomer_spends_elements(store):
    result = assemble_monomer(store, get_monomer('glycine'))
    assert result.success
    s = store.state
    assert s.score == 10
    assert s.element_counts['C'] == 8
    assert s.element_counts['N'] == 2


def test_assemble_monomer_all_or_nothing(store):
    store.remove_element('P', 2)
    result = assemble_monomer(store, get_monomer('nucleotide'))
    assert not result.success
    assert result.missing == {'P': 1}
    assert store.state.element_counts['C'] == 10
    assert store.state.score == 0


def test_result_to_dict(store):
    payload = synthesize(store, DNA).to_dict()
    assert payload['success'] is False
    assert 'DNA' in payload['message']
