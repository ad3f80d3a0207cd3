from enum import Enum
import logging
from typing import List

from Prime import capacity_for
from Probe import probe_sequence

MINIMUM_SIZE_INDEX = 0      # Table never shrinks below this size index
GROW_LOAD = 70              # Grow when count * 100 / size goes above this
SHRINK_LOAD = 10            # Shrink when count * 100 / size goes below this


class Error(Exception):
    """Base class for other exceptions"""
    pass


class AllocationException(Error):
    """Raised when the slot array of a table cannot be allocated"""
    pass


class DestroyedTableException(Error):
    """Raised when a table is used after being destroyed"""
    pass


class MismatchTypeException(Error):
    """Raised when a key or value is not a string"""
    pass


class TableFullException(Error):
    """Raised when a probe walk finds no slot to insert into"""
    pass


class Item:
    """
    Key value pair owned by a single slot of the table. Both key and value
    are strings, data is read-only once created.
    """
    __key: str
    __value: str

    def __init__(self, key: str, value: str) -> None:
        """
        Initializes Item

        Param
            key: key (used to hash)
            value: value (data)
        """
        self.__key = key
        self.__value = value

    def getKey(self) -> str:
        """
        Return: key
        """
        return self.__key

    def getValue(self) -> str:
        """
        Return: value
        """
        return self.__value

    def __str__(self) -> str:
        """
        toString function which returns Item in json style formatting
        {key:<keyval>, value:<val>}
        """
        return "{key:" + self.__key + ", value:" + self.__value + "}"


class SlotState(Enum):
    EMPTY = 0
    TOMBSTONE = 1
    OCCUPIED = 2


class Slot:
    """
    Single cell of the slot array, either empty, a tombstone or holding an Item.

    Empty -> Occupied on insert, Occupied -> Occupied on replace,
    Occupied -> Tombstone on delete, Tombstone -> Occupied on insert.
    A tombstone never becomes empty again, only a rebuild drops it.
    """
    __state: SlotState
    __item: Item | None

    def __init__(self) -> None:
        self.__state = SlotState.EMPTY
        self.__item = None

    def isEmpty(self) -> bool:
        return self.__state is SlotState.EMPTY

    def isTombstone(self) -> bool:
        return self.__state is SlotState.TOMBSTONE

    def isOccupied(self) -> bool:
        return self.__state is SlotState.OCCUPIED

    def getItem(self) -> Item | None:
        """
        Return: item held by the slot, None if not occupied
        """
        return self.__item

    def setItem(self, item: Item) -> None:
        """
        Installs item, dropping whatever the slot held before
        """
        self.__item = item
        self.__state = SlotState.OCCUPIED

    def setTombstone(self) -> None:
        """
        Releases the held item and marks the slot as a tombstone
        """
        self.__item = None
        self.__state = SlotState.TOMBSTONE

    def clear(self) -> None:
        """
        Releases the held item, used when the whole table goes away
        """
        self.__item = None
        self.__state = SlotState.EMPTY

    def __str__(self) -> str:
        if self.__state is SlotState.OCCUPIED:
            return str(self.__item)
        if self.__state is SlotState.TOMBSTONE:
            return "<Tombstone>"
        return "<None>"


class HashTable:
    """
    Open addressed hash table mapping strings to strings. Collisions are
    resolved with double hashing over a prime number of buckets, deletes
    leave tombstones behind and the table is rebuilt (dropping every
    tombstone) when the load goes above GROW_LOAD or below SHRINK_LOAD.

    The HashTable object itself keeps its identity across rebuilds, only
    its storage is swapped.
    """
    __size_index: int           # Controls bucket count through capacity_for
    __size: int                 # Bucket count, always prime
    __count: int                # Number of occupied slots
    __slots: List[Slot]         # Slot array, len(__slots) == __size
    __destroyed: bool           # Set once hashtable_destroy() is called

    def __init__(self, size_index: int = MINIMUM_SIZE_INDEX) -> None:
        """
        Construct an empty hash table. Callers should use the default size
        index, other values are used by rebuilds.

        Param:
            size_index: size index of the new table, MINIMUM_SIZE_INDEX by default
        Raise: AllocationException if the slot array cannot be allocated
        """
        self.__size_index = max(size_index, MINIMUM_SIZE_INDEX)
        self.__size = capacity_for(self.__size_index)
        self.__slots = self.__new_slots(self.__size)
        self.__count = 0
        self.__destroyed = False

    # Core Functions #################################################

    def hashtable_insert(self, key: str, value: str) -> None:
        """
        Inserts key with value, replacing the value if key already exists.
        Grows the table first if the load is above GROW_LOAD.

        Param:
            key: key to insert
            value: value to store with key
        Raise: MismatchTypeException if key or value is not a str
        """
        self.__check_alive()
        self.__check_text(key, value)

        if self.hashtable_getLoad() > GROW_LOAD:
            self.__rebuild(1)

        index, found = self.__find_insert_slot(key)
        self.__slots[index].setItem(Item(key, value))
        if not found:
            self.__count += 1

    def hashtable_search(self, key: str) -> str | None:
        """
        Look up a key and returns its value

        Param:
            key: key to search for
        Return: value stored with key, None if not found
        """
        self.__check_alive()
        self.__check_text(key)

        index = self.__find_key(key)
        if index == -1:
            return None
        return self.__slots[index].getItem().getValue()

    def hashtable_delete(self, key: str) -> None:
        """
        Removes key from the table, does nothing if key does not exist.
        Shrinks the table first if the load is below SHRINK_LOAD.

        Param:
            key: key to remove
        """
        self.__check_alive()
        self.__check_text(key)

        if self.hashtable_getLoad() < SHRINK_LOAD and self.__size_index > MINIMUM_SIZE_INDEX:
            self.__rebuild(-1)

        index = self.__find_key(key)
        if index == -1:
            return

        self.__slots[index].setTombstone()
        self.__count -= 1

    def hashtable_destroy(self) -> None:
        """
        Releases every item and the slot array. The table cannot be used
        afterwards, destroying it again does nothing.
        """
        if self.__destroyed:
            return

        for slot in self.__slots:
            slot.clear()
        self.__slots = []
        self.__count = 0
        self.__destroyed = True

    def hashtable_edit_value(self, key: str, value: str) -> bool:
        """
        Searches for a key in hash table, if found, replaces its value.
        Never inserts a new key.

        Param
            key: key to look for
            value: new value for key
        Return: True if was successful, False if key does not exist
        """
        self.__check_alive()
        self.__check_text(key, value)

        index = self.__find_key(key)
        if index == -1:
            return False

        self.__slots[index].setItem(Item(key, value))
        return True

    def hashtable_exist_by_key(self, key: str) -> int:
        """
        Check if key exists within the hash table

        Params:
            key: key to search for
        Return: slot index if found, -1 if not
        """
        self.__check_alive()
        self.__check_text(key)
        return self.__find_key(key)

    # Getters ########################################################
    def hashtable_getSize(self) -> int:
        """
        Return: bucket count of the table
        """
        return self.__size

    def hashtable_getCount(self) -> int:
        """
        Return: number of live items
        """
        return self.__count

    def hashtable_getSizeIndex(self) -> int:
        """
        Return: current size index
        """
        return self.__size_index

    def hashtable_getLoad(self) -> int:
        """
        Return: load factor times 100, rounded down
        """
        if self.__size == 0:
            return 0
        return self.__count * 100 // self.__size

    def hashtable_print(self) -> None:
        """
        Prints table in the following format
        Index\tData
        1\t\t<data1>
        2\t\t<data2>
        ...
        Empty slots are shown as <None>, deleted ones as <Tombstone>
        """
        print("Index\tData")
        for i, slot in enumerate(self.__slots):
            print(str(i + 1) + "\t\t" + str(slot))

    # Utility #######################################################

    def __find_key(self, key: str) -> int:
        """
        Walks key's probe sequence until key or an empty slot is found.
        Tombstones are walked past.

        Param:
            key: key to search for
        Return: slot index holding key, -1 if not found
        """
        for index in probe_sequence(key, self.__size):
            slot = self.__slots[index]
            if slot.isEmpty():
                return -1
            if slot.isOccupied() and slot.getItem().getKey() == key:
                return index
        return -1

    def __find_insert_slot(self, key: str) -> tuple[int, bool]:
        """
        Finds where key goes. The walk stops at an empty slot or at the slot
        already holding key, the first empty or tombstone slot seen on the
        way is where a new key is placed.

        Param:
            key: key to insert
        Raise: TableFullException if no slot is available
        Return: (slot index, True if key already lives there)
        """
        candidate = -1
        for index in probe_sequence(key, self.__size):
            slot = self.__slots[index]
            if slot.isEmpty():
                return (index if candidate == -1 else candidate), False
            if slot.isTombstone():
                if candidate == -1:
                    candidate = index
            elif slot.getItem().getKey() == key:
                return index, True

        if candidate == -1:
            logging.critical("No free slot for {} in a table of {} buckets".format(key, self.__size))
            raise TableFullException("no free slot in a table of {} buckets".format(self.__size))
        return candidate, False

    def __rebuild(self, delta: int) -> None:
        """
        Rebuilds the table at size index + delta. Live items are inserted
        into a transient table, then its storage is swapped into this one.
        Tombstones are not carried over.

        Param:
            delta: change in size index, usually 1 or -1
        """
        new_index = self.__size_index + delta
        if new_index < MINIMUM_SIZE_INDEX:
            logging.debug("Refused to shrink below size index {}".format(MINIMUM_SIZE_INDEX))
            return

        transient = HashTable(new_index)
        tombstones = 0
        for slot in self.__slots:
            if slot.isOccupied():
                item = slot.getItem()
                transient.hashtable_insert(item.getKey(), item.getValue())
            elif slot.isTombstone():
                tombstones += 1

        logging.debug("Resizing table from {} to {} buckets (size index {} -> {}), {} items migrated, {} tombstones purged"
                      .format(self.__size, transient.__size, self.__size_index, transient.__size_index,
                              transient.__count, tombstones))

        # Swap storage, the transient table takes the old slot array with it
        self.__size_index, transient.__size_index = transient.__size_index, self.__size_index
        self.__size, transient.__size = transient.__size, self.__size
        self.__slots, transient.__slots = transient.__slots, self.__slots
        self.__count = transient.__count
        transient.hashtable_destroy()

    def __new_slots(self, size: int) -> List[Slot]:
        """
        Allocates a slot array of size empty slots

        Raise: AllocationException if memory runs out
        """
        try:
            return [Slot() for _ in range(size)]
        except MemoryError as e:
            logging.critical("Could not allocate {} slots".format(size))
            raise AllocationException("could not allocate {} slots".format(size)) from e

    def __check_alive(self) -> None:
        """
        Raise: DestroyedTableException if the table has been destroyed
        """
        if self.__destroyed:
            logging.warning("Operation attempted on a destroyed table")
            raise DestroyedTableException("table has been destroyed")

    def __check_text(self, *args) -> None:
        """
        Raise: MismatchTypeException if any argument is not a str
        """
        for arg in args:
            if not isinstance(arg, str):
                raise MismatchTypeException("expected str, got {}".format(type(arg).__name__))
