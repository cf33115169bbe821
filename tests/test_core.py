import os
import sys
import logging
import random
import pytest

# Add codec to path
CODEC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'codec'))
if CODEC_DIR not in sys.path:
	sys.path.insert(0, CODEC_DIR)

from huffman_core import HuffmanLogic, HuffmanNode
from huffman_errors import EmptyInputError, MalformedBitstreamError


SAMPLE = "the quick brown fox jumps over the lazy dog, THE QUICK BROWN FOX! 0123456789\n"


def _shape(root):
	# preorder listing: symbol for leaves, None for internal nodes
	out = []
	stack = [root]
	while stack:
		node = stack.pop()
		out.append((node.char, node.freq))
		if not node.is_leaf():
			stack.append(node.right)
			stack.append(node.left)
	return out


def _leaves(root):
	return [node for node in _nodes(root) if node.is_leaf()]


def _nodes(root):
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		if not node.is_leaf():
			stack.extend((node.left, node.right))


def test_count_frequencies():
	logic = HuffmanLogic()
	freqs = logic.count_frequencies("aaab")
	assert freqs == {'a': 3, 'b': 1}
	# absent symbols read as zero
	assert freqs['z'] == 0


def test_count_frequencies_skips_out_of_range_symbols():
	logic = HuffmanLogic(alphabet_size=128)
	freqs = logic.count_frequencies("héllo世")
	assert freqs == {'h': 1, 'l': 2, 'o': 1}
	assert freqs['é'] == 0


def test_build_tree_empty_raises():
	logic = HuffmanLogic()
	with pytest.raises(EmptyInputError):
		logic.build_tree(logic.count_frequencies(""))
	with pytest.raises(EmptyInputError):
		logic.build_tree({'a': 0})


def test_build_tree_all_symbols_out_of_range_raises():
	logic = HuffmanLogic(alphabet_size=64)
	with pytest.raises(EmptyInputError):
		logic.build_tree(logic.count_frequencies("~~~~"))


def test_aaab_scenario():
	logic = HuffmanLogic()
	freqs = logic.count_frequencies("aaab")
	tree = logic.build_tree(freqs)
	assert tree.freq == 4
	assert not tree.is_leaf()
	# the least frequent node is popped first and becomes the left child
	assert tree.left.char == 'b'
	assert tree.right.char == 'a'

	codes = logic.generate_codes(tree)
	assert codes == {'b': '0', 'a': '1'}
	bits = logic.encode("aaab", codes)
	assert bits == "1110"
	assert logic.decode(bits, tree) == list("aaab")


def test_equal_frequencies_break_ties_by_symbol_value():
	logic = HuffmanLogic()
	tree = logic.build_tree({'d': 1, 'c': 1, 'b': 1, 'a': 1})
	assert logic.generate_codes(tree) == {'a': '00', 'b': '01', 'c': '10', 'd': '11'}


def test_internal_nodes_merge_before_leaves_of_equal_frequency():
	logic = HuffmanLogic()
	tree = logic.build_tree({'a': 2, 'b': 1, 'c': 1})
	# the merged (b, c) node of frequency 2 is popped before leaf 'a'
	assert tree.left.char is None
	assert tree.right.char == 'a'
	assert logic.generate_codes(tree) == {'b': '00', 'c': '01', 'a': '1'}


def test_internal_nodes_of_equal_frequency_merge_in_creation_order():
	logic = HuffmanLogic()
	tree = logic.build_tree({'a': 1, 'b': 1, 'c': 1, 'd': 1, 'e': 4})
	# (a, b) is created before (c, d); both weigh 2 and are popped first
	assert logic.generate_codes(tree) == {'a': '000', 'b': '001', 'c': '010', 'd': '011', 'e': '1'}


def test_build_tree_logs_seeded_symbols_only(caplog):
	logic = HuffmanLogic()
	with caplog.at_level(logging.DEBUG, logger="huffman_core"):
		logic.build_tree({'a': 0, 'b': 1, 'c': 1, 'z': 0})
	assert "seeded tree with 2 symbols" in caplog.text


def test_tree_is_deterministic():
	logic = HuffmanLogic()
	freqs = logic.count_frequencies(SAMPLE * 3)
	reordered = dict(reversed(list(freqs.items())))

	first = logic.build_tree(freqs)
	second = logic.build_tree(freqs)
	third = logic.build_tree(reordered)
	assert _shape(first) == _shape(second) == _shape(third)
	assert logic.generate_codes(first) == logic.generate_codes(third)


def test_tree_is_full_binary_tree():
	logic = HuffmanLogic()
	tree = logic.build_tree(logic.count_frequencies(SAMPLE))
	for node in _nodes(tree):
		if node.char is None:
			assert node.left is not None and node.right is not None
			assert node.freq == node.left.freq + node.right.freq
		else:
			assert node.is_leaf()


def test_frequency_conservation():
	logic = HuffmanLogic()
	freqs = logic.count_frequencies(SAMPLE * 7)
	tree = logic.build_tree(freqs)
	leaves = _leaves(tree)
	assert sum(leaf.freq for leaf in leaves) == sum(freqs.values())
	assert tree.freq == sum(freqs.values())
	assert {leaf.char: leaf.freq for leaf in leaves} == dict(freqs)


def test_codes_are_prefix_free():
	logic = HuffmanLogic()
	codes = logic.generate_codes(logic.build_tree(logic.count_frequencies(SAMPLE)))
	assert len(codes) == len(set(SAMPLE))
	for x, code_x in codes.items():
		assert code_x
		for y, code_y in codes.items():
			if x != y:
				assert not code_y.startswith(code_x)


def test_single_symbol_gets_one_bit_code():
	logic = HuffmanLogic()
	tree = logic.build_tree(logic.count_frequencies("aaaa"))
	assert tree.is_leaf()
	codes = logic.generate_codes(tree)
	assert codes == {'a': '0'}
	bits = logic.encode("aaaa", codes)
	assert bits == "0000"
	assert logic.decode(bits, tree) == list("aaaa")


def test_single_symbol_tree_rejects_one_bits():
	logic = HuffmanLogic()
	tree = HuffmanNode('a', 3)
	with pytest.raises(MalformedBitstreamError):
		logic.decode("010", tree)


def test_skewed_tree_deeper_than_recursion_limit():
	logic = HuffmanLogic()
	count = 1200
	freqs = {chr(0x100 + i): 2 ** i for i in range(count)}
	tree = logic.build_tree(freqs)
	codes = logic.generate_codes(tree)
	assert max(len(code) for code in codes.values()) == count - 1

	text = "".join(freqs)
	bits = logic.encode(text, codes)
	assert "".join(logic.decode(bits, tree)) == text


def test_encode_skips_symbols_without_code():
	logic = HuffmanLogic()
	assert logic.encode("abza", {'a': '0', 'b': '1'}) == "010"


def test_decode_rejects_invalid_bit():
	logic = HuffmanLogic()
	tree = logic.build_tree({'a': 1, 'b': 1, 'c': 1, 'd': 1})
	with pytest.raises(MalformedBitstreamError):
		logic.decode("0012", tree)


def test_decode_rejects_bitstream_ending_mid_code():
	logic = HuffmanLogic()
	tree = logic.build_tree({'a': 1, 'b': 1, 'c': 1, 'd': 1})
	assert logic.decode("0011", tree) == ['a', 'd']
	with pytest.raises(MalformedBitstreamError):
		logic.decode("00110", tree)


def test_decode_empty_bitstream():
	logic = HuffmanLogic()
	tree = logic.build_tree({'a': 1, 'b': 1})
	assert logic.decode("", tree) == []


def test_roundtrip_random_text():
	logic = HuffmanLogic()
	alphabet = "abcdefgh \né世\U0001f600"
	for _ in range(20):
		text = "".join(random.choice(alphabet) for _ in range(random.randint(1, 300)))
		tree = logic.build_tree(logic.count_frequencies(text))
		bits = logic.encode(text, logic.generate_codes(tree))
		assert "".join(logic.decode(bits, tree)) == text
