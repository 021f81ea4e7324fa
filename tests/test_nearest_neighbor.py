import math

from tsptour import Deadline, MultiStartNearestNeighbor, SolverConfig, TSPInstance

from .conftest import StepClock


def test_square_perimeter_from_every_start(square_matrix, far_deadline):
    nn = MultiStartNearestNeighbor(square_matrix, deadline=far_deadline)
    for start in range(4):
        path, cost = nn._grow_path(start)
        assert cost == 40
        assert sorted(path) == [0, 1, 2, 3]
    tour, timed_out = nn.run()
    assert not timed_out
    assert tour.cost == 40


def test_ties_keep_first_city_in_scan_order(square_matrix, far_deadline):
    # from city 0 both 1 and 3 are 10 away; 1 is scanned first
    path, _ = MultiStartNearestNeighbor(square_matrix, deadline=far_deadline)._grow_path(0)
    assert path == [0, 1, 2, 3]


def test_best_of_all_starts_is_kept(random_instance, far_deadline):
    D = random_instance.distance_matrix()
    nn = MultiStartNearestNeighbor(D, deadline=far_deadline)
    costs = [nn._grow_path(s)[1] for s in range(len(D))]
    tour, timed_out = nn.run()
    assert not timed_out
    assert tour.cost == min(costs)
    # strict improvement only: the earliest start reaching the minimum wins
    assert tour.order[0] == costs.index(min(costs))


def test_tour_is_permutation_with_matching_cost(random_instance, far_deadline):
    D = random_instance.distance_matrix()
    tour, _ = MultiStartNearestNeighbor(D, deadline=far_deadline).run()
    assert sorted(tour.order) == list(range(len(D)))
    assert tour.cost == D.tour_cost(tour.order)


def test_stride_samples_large_instances():
    D = TSPInstance.random_euclidean(300, seed=1).distance_matrix()
    assert MultiStartNearestNeighbor(D).stride() == 300 // 35
    assert MultiStartNearestNeighbor(D, SolverConfig(nn_starts=1000)).stride() == 1
    assert MultiStartNearestNeighbor(D, SolverConfig(exhaustive_below=301)).stride() == 1


def test_stride_is_one_for_small_instances(random_instance):
    assert MultiStartNearestNeighbor(random_instance.distance_matrix()).stride() == 1


def test_expired_deadline_stops_immediately(square_matrix, expired_deadline):
    tour, timed_out = MultiStartNearestNeighbor(square_matrix, deadline=expired_deadline).run()
    assert timed_out
    assert tour.order == []
    assert tour.cost == math.inf
    # only the first city appended was checked
    assert expired_deadline.clock.calls == 1


def test_timeout_mid_attempt_keeps_completed_attempts():
    inst = TSPInstance.random_euclidean(5, seed=11, square_size=100)
    D = inst.distance_matrix()
    # one check per appended city: start 0 uses checks 1..4, start 1 dies at check 7
    deadline = Deadline(limit=6.5, start=0.0, clock=StepClock(step=1.0))
    tour, timed_out = MultiStartNearestNeighbor(D, deadline=deadline).run()
    assert timed_out
    expected_path, expected_cost = MultiStartNearestNeighbor(D, deadline=Deadline(1e9))._grow_path(0)
    assert tour.order == expected_path
    assert tour.cost == expected_cost
    assert deadline.clock.calls == 7


def test_degenerate_instances(expired_deadline):
    empty, timed_out = MultiStartNearestNeighbor(TSPInstance([]).distance_matrix(), deadline=expired_deadline).run()
    assert (empty.order, empty.cost, timed_out) == ([], 0, False)
    single, timed_out = MultiStartNearestNeighbor(TSPInstance([(3, 4)]).distance_matrix(),
                                                  deadline=expired_deadline).run()
    assert (single.order, single.cost, timed_out) == ([0], 0, False)


def test_two_cities_go_there_and_back(far_deadline):
    D = TSPInstance([(0, 0), (3, 4)]).distance_matrix()
    tour, _ = MultiStartNearestNeighbor(D, deadline=far_deadline).run()
    assert tour.order == [0, 1]
    assert tour.cost == 10
