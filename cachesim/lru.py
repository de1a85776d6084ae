def selectVictim(lines):
    """LRU replacement, index of the least recently used line.

    Scans from way 0, a later way only replaces the candidate when its last
    access is strictly older, so ties go to the lowest way.
    """
    index = 0
    minAccess = lines[0].lastUsed
    for i, line in enumerate(lines):
        if line.lastUsed < minAccess:
            index = i
            minAccess = line.lastUsed
    return index
