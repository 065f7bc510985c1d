import math


def round_half_up(value):
    """Round to the nearest integer with halves going up (toward +inf)"""
    return int(math.floor(value + 0.5))


class HexCoordinates:
    """Utility class for the pointy-top offset hexagon lattice.

    Cells are addressed by (col, row) offset coordinates. Odd rows are
    shifted right by half a column, matching the conventional hexbin layout
    so the decision grid and the density bins line up cell for cell.
    """

    SQRT3 = math.sqrt(3)

    @staticmethod
    def spacing(radius):
        """
        Distance between neighboring centers along each axis

        Args:
            radius: Hexagon circumradius (center to corner)

        Returns:
            (dx, dy): Column spacing radius*sqrt(3) and row spacing 1.5*radius
        """
        return radius * HexCoordinates.SQRT3, radius * 1.5

    @staticmethod
    def offset_to_cartesian(col, row, radius):
        """
        Convert lattice offset coordinates to the cell center

        Args:
            col, row: Offset coordinates
            radius: Hexagon circumradius

        Returns:
            (x, y): Center coordinates
        """
        dx, dy = HexCoordinates.spacing(radius)
        return (col + (row & 1) / 2.0) * dx, row * dy

    @staticmethod
    def cartesian_to_axial(x, y, radius):
        """
        Convert Cartesian coordinates to fractional axial coordinates (q, r)
        Using pointy-top hexagon orientation

        Args:
            x, y: Cartesian coordinates
            radius: Hexagon circumradius

        Returns:
            (q, r): Fractional axial coordinates
        """
        q = (HexCoordinates.SQRT3 / 3.0 * x - 1.0 / 3.0 * y) / radius
        r = (2.0 / 3.0 * y) / radius
        return q, r

    @staticmethod
    def hex_round(q, r):
        """
        Round fractional hex coordinates to nearest integer hex coordinates

        Args:
            q, r: Fractional axial coordinates

        Returns:
            (q_int, r_int): Integer axial coordinates
        """
        # Convert to cube coordinates for easier rounding
        s = -q - r

        rq = round_half_up(q)
        rr = round_half_up(r)
        rs = round_half_up(s)

        q_diff = abs(rq - q)
        r_diff = abs(rr - r)
        s_diff = abs(rs - s)

        if q_diff > r_diff and q_diff > s_diff:
            rq = -rr - rs
        elif r_diff > s_diff:
            rr = -rq - rs

        return int(rq), int(rr)

    @staticmethod
    def axial_to_offset(q, r):
        """Axial (q, r) to offset (col, row) with odd rows shifted right"""
        return q + (r - (r & 1)) // 2, r

    @staticmethod
    def cartesian_to_offset(x, y, radius):
        """
        Forward hex rounding: offset coordinates of the lattice cell whose
        center is nearest to (x, y).

        Cube rounding finds the hexagon containing the point, which is the
        nearest center. On exact ties (points on a hexagon edge or corner) the
        cube coordinate with the largest rounding error is recomputed from the
        other two, with halves rounded up, so the result is deterministic.

        Args:
            x, y: Cartesian coordinates
            radius: Hexagon circumradius

        Returns:
            (col, row): Offset coordinates
        """
        q, r = HexCoordinates.cartesian_to_axial(x, y, radius)
        return HexCoordinates.axial_to_offset(*HexCoordinates.hex_round(q, r))

    @staticmethod
    def lattice_bounds(min_x, min_y, max_x, max_y, radius):
        """
        Offset ranges spanned by a hexbin grid covering the given box

        Rows start at floor(min_y / dy) and continue while the row center is
        below max_y + radius; columns start at floor(min_x / dx) and continue
        while the center is left of max_x + dx / 2. Starting at the floor
        rather than the rounded index keeps the first row and column at or
        before the box edge, so every point of the box is within one radius
        of some center.

        Returns:
            (i0, j0, n_rows): First column index, first row index, row count
        """
        dx, dy = HexCoordinates.spacing(radius)
        j0 = int(math.floor(min_y / dy))
        i0 = int(math.floor(min_x / dx))
        n_rows = 0
        while (j0 + n_rows) * dy < max_y + radius:
            n_rows += 1
        return i0, j0, n_rows

    @staticmethod
    def hexagon_corners(radius, center=(0.0, 0.0)):
        """
        Corner coordinates of a pointy-top hexagon, starting at the top
        corner and going clockwise

        Args:
            radius: Hexagon circumradius
            center: (x, y) center to offset corners by

        Returns:
            List of six (x, y) tuples
        """
        cx, cy = center
        corners = []
        for n in range(6):
            angle = n * math.pi / 3
            corners.append((cx + radius * math.sin(angle), cy + radius * math.cos(angle)))
        return corners
