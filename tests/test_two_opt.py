import pytest

from tsptour import (Deadline, MultiStartNearestNeighbor, SolverConfig, TSPInstance, Tour,
                     TwoOptOptimizer)


def brute_force_best_gain(D, order):
    n = len(order)
    best = 0
    for i in range(n - 2):
        for j in range(i + 2, n - 1):
            a, b, c, e = order[i], order[i + 1], order[j], order[j + 1]
            best = max(best, D[a][b] + D[c][e] - D[a][c] - D[b][e])
    return best


def test_square_perimeter_is_left_alone(square_matrix, far_deadline):
    tour = Tour(order=[0, 1, 2, 3], cost=40)
    stats = TwoOptOptimizer(square_matrix, deadline=far_deadline).run(tour)
    assert tour.order == [0, 1, 2, 3]
    assert tour.cost == 40
    assert stats.converged and not stats.timed_out
    assert stats.swaps == 0 and stats.passes == 1


def test_crossed_square_is_uncrossed_in_one_pass(square_matrix, expired_deadline):
    tour = Tour(order=[0, 2, 1, 3], cost=square_matrix.tour_cost([0, 2, 1, 3]))
    assert tour.cost == 48
    # expired deadline: exactly one pass runs
    stats = TwoOptOptimizer(square_matrix, deadline=expired_deadline).run(tour)
    assert stats.timed_out and stats.passes == 1 and stats.swaps == 1
    assert tour.order == [0, 1, 2, 3]
    assert tour.cost == 40 == square_matrix.tour_cost(tour.order)


def test_one_swap_per_pass_with_largest_gain(expired_deadline):
    inst = TSPInstance.random_euclidean(30, seed=5, square_size=300)
    D = inst.distance_matrix()
    order = list(range(30))
    tour = Tour(order=list(order), cost=D.tour_cost(order))
    opt = TwoOptOptimizer(D, deadline=expired_deadline)
    expected_gain = brute_force_best_gain(D, order)
    assert expected_gain > 0
    stats = opt.run(tour)
    assert stats.swaps == 1
    assert D.tour_cost(order) - tour.cost == expected_gain
    assert tour.cost == D.tour_cost(tour.order)


def test_cost_never_increases_and_stays_consistent(random_instance, far_deadline):
    D = random_instance.distance_matrix()
    tour, _ = MultiStartNearestNeighbor(D, deadline=far_deadline).run()
    opt = TwoOptOptimizer(D, deadline=far_deadline)
    stats = opt.run(tour)
    assert stats.converged
    history = opt.history_costs
    assert all(b < a for a, b in zip(history, history[1:]))
    assert tour.cost == D.tour_cost(tour.order)
    assert sorted(tour.order) == list(range(len(D)))
    assert brute_force_best_gain(D, tour.order) == 0


def test_rerun_on_converged_tour_changes_nothing(random_instance, far_deadline):
    D = random_instance.distance_matrix()
    order = list(range(len(D)))
    tour = Tour(order=order, cost=D.tour_cost(order))
    TwoOptOptimizer(D, deadline=far_deadline).run(tour)
    before = (list(tour.order), tour.cost)
    stats = TwoOptOptimizer(D, deadline=far_deadline).run(tour)
    assert (tour.order, tour.cost) == before
    assert stats.swaps == 0 and stats.converged


def test_closing_edge_is_not_a_candidate(far_deadline):
    # [1, 2, 3, 0] crosses on 2->3 and on the closing 0->1 edge
    D = TSPInstance([(0, 0), (10, 10), (0, 10), (10, 0)]).distance_matrix()
    opt = TwoOptOptimizer(D, deadline=far_deadline)
    assert D.tour_cost([1, 2, 3, 0]) == 48
    assert opt.best_move([1, 2, 3, 0]) is None
    assert opt.best_move([0, 1, 2, 3]) == (8, 0, 2)
    tiny = TSPInstance([(0, 0), (5, 5), (9, 1)]).distance_matrix()
    assert TwoOptOptimizer(tiny, deadline=far_deadline).best_move([0, 1, 2]) is None


def test_recorded_tours_follow_history(random_instance, far_deadline):
    D = random_instance.distance_matrix()
    order = list(range(len(D)))
    tour = Tour(order=order, cost=D.tour_cost(order))
    opt = TwoOptOptimizer(D, SolverConfig(record_tours=True), deadline=far_deadline)
    opt.run(tour)
    assert len(opt.history_tours) == len(opt.history_costs)
    for snapshot, cost in zip(opt.history_tours, opt.history_costs):
        assert D.tour_cost(snapshot) == cost


def test_wrong_tour_size_rejected(square_matrix, far_deadline):
    with pytest.raises(ValueError):
        TwoOptOptimizer(square_matrix, deadline=far_deadline).run(Tour(order=[0, 1, 2], cost=30))
