from sokoban_game.cells import RIGHT
from sokoban_game.encoding import floor_bits, encode_state
from sokoban_game.game import Game


def test_floor_bits():
    assert floor_bits(1) == 0
    assert floor_bits(2) == 1
    assert floor_bits(3) == 2
    assert floor_bits(4) == 2
    assert floor_bits(5) == 3
    assert floor_bits(125 * 125) == 14


def test_player_is_the_low_field():
    g = Game("#####\n#*&$#\n#####")
    # player on floor 0, box on floor 1, 2 bits per field
    assert g.state == 0b01_00
    g.move(RIGHT)
    assert g.state == 0b10_01


def test_box_order_does_not_matter():
    index = [[0, 1, 2, 3]]
    a = encode_state(index, 2, (0, 0), [(0, 3), (0, 1)])
    b = encode_state(index, 2, (0, 0), {(0, 1), (0, 3)})
    assert a == b == (1 << 2) | (3 << 4)


def test_distinct_placements_give_distinct_keys():
    index = [[0, 1, 2, 3]]
    keys = {
        encode_state(index, 2, p, [b])
        for p in [(0, 0), (0, 1), (0, 2), (0, 3)]
        for b in [(0, 0), (0, 1), (0, 2), (0, 3)]
        if p != b
    }
    assert len(keys) == 12
