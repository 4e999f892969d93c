import unittest

from size_oracle import SizeOracle
from syntax_nodes import Field, TypeDescriptor, TypeKind


def basic(name, size=None):
    return TypeDescriptor(TypeKind.BASIC, name=name, size=size)


def struct(name, *fields):
    return TypeDescriptor(TypeKind.STRUCT, name=name, fields=tuple(Field(n, t) for n, t in fields))


class SizeOracleTest(unittest.TestCase):
    def setUp(self):
        self.sizes = SizeOracle()

    def test_user_struct_is_32_bytes(self):
        user = struct(
            "User",
            ("ID", basic("int64")),
            ("Name", basic("string")),
            ("Age", basic("int32")),
            ("Active", basic("bool")),
        )
        self.assertEqual(self.sizes.size_of(user), 32)

    def test_fields_are_aligned_in_declaration_order(self):
        padded = struct("Padded", ("A", basic("bool")), ("B", basic("int64")), ("C", basic("bool")))
        packed = struct("Packed", ("B", basic("int64")), ("A", basic("bool")), ("C", basic("bool")))
        self.assertEqual(self.sizes.size_of(padded), 24)
        self.assertEqual(self.sizes.size_of(packed), 16)

    def test_struct_rounded_to_its_own_alignment(self):
        small = struct("Small", ("A", basic("int32")), ("B", basic("bool")))
        self.assertEqual(self.sizes.size_of(small), 8)
        self.assertEqual(self.sizes.align_of(small), 4)

    def test_fixed_arrays_multiply_element_size(self):
        block = TypeDescriptor(TypeKind.ARRAY, elem=basic("byte"), length=512)
        large = struct("Large", ("F1", block), ("F2", block), ("F3", block))
        self.assertEqual(self.sizes.size_of(block), 512)
        self.assertEqual(self.sizes.size_of(large), 1536)

    def test_reference_kinds_are_one_word(self):
        user = struct("User", ("ID", basic("int64")))
        for kind in (TypeKind.POINTER, TypeKind.SLICE, TypeKind.MAP, TypeKind.CHAN, TypeKind.FUNC):
            with self.subTest(kind=kind):
                self.assertEqual(self.sizes.size_of(TypeDescriptor(kind, elem=user)), 8)
        self.assertEqual(self.sizes.size_of(TypeDescriptor(TypeKind.INTERFACE)), 16)

    def test_unknown_basic_falls_back_to_word(self):
        self.assertEqual(self.sizes.size_of(basic("mystery")), 8)
        self.assertEqual(self.sizes.size_of(basic("mystery", size=3)), 3)
        self.assertEqual(self.sizes.size_of(None), 8)

    def test_empty_struct_is_zero(self):
        self.assertEqual(self.sizes.size_of(struct("Empty")), 0)

    def test_size_is_deterministic_across_oracles(self):
        user = struct("User", ("ID", basic("int64")), ("Name", basic("string")))
        self.assertEqual(SizeOracle().size_of(user), SizeOracle().size_of(user))
        self.assertEqual(self.sizes.size_of(user), self.sizes.size_of(user))


if __name__ == "__main__":
    unittest.main()
